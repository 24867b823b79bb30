"""JSON serialisation of grouped crumbs."""

from __future__ import annotations

import json

from ..models import GroupedCrumbs


def render_json(grouped: GroupedCrumbs) -> str:
    return json.dumps(grouped.to_dict(), indent="\t", ensure_ascii=False)


__all__ = ["render_json"]
