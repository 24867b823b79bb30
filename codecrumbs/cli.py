"""CLI entrypoints for codecrumbs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, OUTPUT_FORMATS
from .logging import configure_logging
from .orchestrator import Orchestrator, RunOptions
from .renderer.github import GithubRenderer

RENDER_SOURCES = ("markdown",)
RENDER_TARGETS = ("gfm", "readme")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codecrumbs",
        description="Learn, design or document a codebase by putting breadcrumbs in source code.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Collect codecrumbs from a project and render them as a document.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "-d",
        "--dir",
        default=".",
        help="Project directory containing augmented source code (defaults to current directory).",
    )
    scan_parser.add_argument(
        "-p",
        "--project",
        default=None,
        help="Project prefix on GitHub (for GFM) or just a name.",
    )
    scan_parser.add_argument(
        "-e",
        "--entry",
        default=None,
        help="Entrypoint file that is likely the source of main codecrumbs trails.",
    )
    scan_parser.add_argument(
        "--include",
        action="append",
        default=[],
        help="Include path prefix (repeatable, '...' includes everything).",
    )
    scan_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Exclude paths matching a regular expression, e.g. vendor (repeatable).",
    )
    scan_parser.add_argument(
        "--prefix",
        dest="source_prefix",
        default=None,
        help="Source prefix for the file paths referenced in the documentation.",
    )
    scan_parser.add_argument(
        "--marker",
        default=None,
        help="Marker sigil that opens a codecrumb (default: cc:).",
    )
    scan_parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="The format of output to produce.",
    )
    scan_parser.add_argument(
        "-o",
        "--out",
        dest="output",
        default=None,
        help="Output file path (prints to stdout when omitted).",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render a generated document into another representation (e.g. Markdown -> HTML).",
    )
    _add_verbose_option(render_parser, suppress_default=True)
    render_parser.add_argument(
        "file",
        help="Input file to read, must be in the --from format.",
    )
    render_parser.add_argument(
        "--from",
        dest="source_format",
        choices=RENDER_SOURCES,
        default="markdown",
        help="Format of the source to render.",
    )
    render_parser.add_argument(
        "--to",
        dest="target_format",
        choices=RENDER_TARGETS,
        default="readme",
        help="gfm (GitHub Flavoured Markdown HTML) or readme (GitHub Readme HTML).",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file path (defaults to FILE.html).",
    )
    render_parser.add_argument(
        "-p",
        "--project",
        default="",
        help="Project used as context for GitHub Flavoured Markdown references.",
    )
    render_parser.add_argument(
        "--client-id",
        default=None,
        help="GitHub Client ID for authorization of requests.",
    )
    render_parser.add_argument(
        "--client-secret",
        default=None,
        help="GitHub Client Secret for authorization of requests.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing scans as JSON.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codecrumbs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "scan":
        _run_scan(parser, args)
    elif args.command == "render":
        _run_render(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_scan(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    options = RunOptions(
        project=args.project,
        entry=args.entry,
        source_prefix=args.source_prefix,
        marker=args.marker,
        format=args.format,
        output=Path(args.output) if args.output else None,
        include=list(args.include),
        exclude=list(args.exclude),
    )
    try:
        result = Orchestrator().run(args.dir, options)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"codecrumbs scan failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"codecrumbs scan failed: {exc}\nRun with --verbose for more details.\n")

    if result.output is not None:
        print(f"{result.format.title()} document written to {_relativize(result.output)}")
    else:
        print(result.document)


def _run_render(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    source = Path(args.file)
    try:
        markdown = source.read_text(encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"{exc}\n")

    renderer = GithubRenderer(args.project, args.client_id, args.client_secret)
    try:
        if args.target_format == "gfm":
            html = renderer.render_gfm(markdown)
        else:
            html = renderer.render_readme(markdown)
    except RuntimeError as exc:
        parser.exit(1, f"codecrumbs render failed: {exc}\n")

    output = Path(args.output) if args.output else Path(f"{args.file}.html")
    output.write_text(html, encoding="utf-8")
    print(f"HTML written to {_relativize(output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
