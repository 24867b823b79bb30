"""Pipeline orchestration: walk, scan, assemble, render."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .assembler import TrailAssembler
from .config import FORMAT_JSON, FORMAT_MARKDOWN, OUTPUT_FORMATS, CrumbsConfig, load_config
from .generator.json_doc import render_json
from .generator.markdown import MarkdownGenerator
from .languages import LanguageRegistry
from .logging import get_logger
from .models import Crumb, GroupedCrumbs
from .parser.scanner import DEFAULT_MARKER, CommentScanner, DuplicateMarkerError
from .repo_scanner import RepoScanner, SourceFile


@dataclass
class RunOptions:
    """Explicit settings that take precedence over .codecrumbs.yml."""

    project: Optional[str] = None
    entry: Optional[str] = None
    source_prefix: Optional[str] = None
    marker: Optional[str] = None
    format: Optional[str] = None
    output: Optional[Path] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)


@dataclass
class FileFault:
    """A file whose crumbs were dropped, and why."""

    path: str
    reason: str


@dataclass
class RunResult:
    """Outcome of a full documentation run."""

    grouped: GroupedCrumbs
    document: str
    format: str
    output: Optional[Path] = None
    faults: List[FileFault] = field(default_factory=list)


class Orchestrator:
    """Coordinates the codecrumbs pipeline for one project directory."""

    def __init__(
        self,
        repo_scanner: RepoScanner | None = None,
        registry: LanguageRegistry | None = None,
    ) -> None:
        self.repo_scanner = repo_scanner or RepoScanner(registry)
        self.logger = get_logger("orchestrator")
        self.faults: List[FileFault] = []

    def collect(
        self,
        path: str | Path,
        *,
        entry: Optional[str] = None,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
        marker: Optional[str] = None,
    ) -> GroupedCrumbs:
        """Scan every eligible file under ``path`` and group the crumbs found."""
        sources = self.repo_scanner.scan(path, include=include, exclude=exclude)
        self.logger.debug("Walker found %d candidate files", len(sources))

        crumb_lists, self.faults = self.scan_sources(sources, marker=marker)

        assembler = TrailAssembler(entry)
        assembler.add_all(crumb_lists)
        grouped = assembler.build()
        stats = grouped.stats()
        self.logger.info(
            "Collected %d crumbs: %d main trails, %d side trails, %d remarks",
            stats.total,
            stats.main,
            stats.side,
            stats.remarks,
        )
        return grouped

    def scan_sources(
        self, sources: Sequence[SourceFile], *, marker: Optional[str] = None
    ) -> Tuple[List[List[Crumb]], List[FileFault]]:
        """Scan files in the order given; a failing file is logged and skipped."""
        scanner = CommentScanner(marker or DEFAULT_MARKER)
        crumb_lists: List[List[Crumb]] = []
        faults: List[FileFault] = []
        for source in sources:
            try:
                crumbs = scanner.scan_file(source.path, source.rel_path, source.language)
            except DuplicateMarkerError as exc:
                self.logger.warning("Skipping %s: %s", source.rel_path, exc)
                faults.append(FileFault(source.rel_path, str(exc)))
                continue
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Unable to read %s: %s", source.rel_path, exc)
                faults.append(FileFault(source.rel_path, str(exc)))
                continue
            if crumbs:
                self.logger.debug("%s: %d crumbs", source.rel_path, len(crumbs))
                crumb_lists.append(crumbs)
        return crumb_lists, faults

    def run(self, path: str | Path, options: RunOptions | None = None) -> RunResult:
        """Collect crumbs and render the configured document format."""
        options = options or RunOptions()
        project_path = Path(path).expanduser().resolve()
        if not project_path.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not project_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")
        config = self._resolve_config(project_path, options)
        if config.format not in OUTPUT_FORMATS:
            raise ValueError(f"unsupported output format: {config.format}")
        if not config.entry:
            self.logger.warning(
                "No entry point configured; every trail will be reported as a side trail"
            )

        self.logger.info("Scanning %s", project_path)
        grouped = self.collect(
            project_path,
            entry=config.entry,
            include=config.include,
            exclude=config.exclude,
            marker=config.marker,
        )
        document = self.render(grouped, config)

        if config.output is not None:
            config.output.parent.mkdir(parents=True, exist_ok=True)
            config.output.write_text(document, encoding="utf-8")
            self.logger.info("Wrote %s document to %s", config.format, config.output)

        return RunResult(
            grouped=grouped,
            document=document,
            format=config.format,
            output=config.output,
            faults=list(self.faults),
        )

    @staticmethod
    def render(grouped: GroupedCrumbs, config: CrumbsConfig) -> str:
        if config.format == FORMAT_JSON:
            return render_json(grouped)
        if config.format == FORMAT_MARKDOWN:
            generator = MarkdownGenerator(
                config.project_name,
                config.entry or "",
                config.source_prefix,
            )
            return generator.render_document(grouped)
        raise ValueError(f"unsupported output format: {config.format}")

    @staticmethod
    def _resolve_config(project_path: Path, options: RunOptions) -> CrumbsConfig:
        config = load_config(project_path)
        return config.merged(
            project=options.project,
            entry=options.entry,
            source_prefix=options.source_prefix,
            marker=options.marker,
            format=options.format.lower() if options.format else None,
            output=options.output,
            include=list(options.include),
            exclude=list(options.exclude),
        )


__all__ = ["FileFault", "Orchestrator", "RunOptions", "RunResult"]
