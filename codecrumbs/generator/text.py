"""Text helpers shared by the document generators."""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

_WORD_RX = re.compile(r"\w+")
_WORD_START_RX = re.compile(r"(^|[^\w'])(\w)")


def title_case(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched."""
    return _WORD_START_RX.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def anchor(title: str) -> str:
    """Return the in-page anchor GitHub generates for a heading."""
    return "#" + "-".join(_WORD_RX.findall(title)).lower()


def _trim_common(lines: Sequence[str], prefix: str) -> Tuple[List[str], bool]:
    if not lines or not all(line.startswith(prefix) for line in lines):
        return list(lines), False
    return [line[len(prefix):] for line in lines], True


def dedent_lines(lines: Sequence[str]) -> List[str]:
    """Strip leading tabs shared by every line, then shared leading spaces."""
    result, modified = _trim_common(lines, "\t")
    while modified:
        result, modified = _trim_common(result, "\t")
    result, modified = _trim_common(result, " ")
    while modified:
        result, modified = _trim_common(result, " ")
    return result


def join_prefix_path(prefix: str, path: str) -> str:
    """Build a link to ``path``, expanding GitHub organisation or repository URLs."""
    if prefix.startswith("https://github.com"):
        trimmed = prefix[len("https://"):].rstrip("/")
        if len(trimmed.split("/")) == 2:
            repo_name, _, rest = path.partition("/")
            return f"https://{trimmed}/{repo_name}/blob/master/{rest}"
        return f"https://{trimmed}/blob/master/{path}"
    return prefix + path


__all__ = ["anchor", "dedent_lines", "join_prefix_path", "title_case"]
