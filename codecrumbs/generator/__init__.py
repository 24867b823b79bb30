"""Document generators for grouped crumbs."""

from .json_doc import render_json
from .markdown import MarkdownGenerator
from .tree import render_trail_tree

__all__ = ["MarkdownGenerator", "render_json", "render_trail_tree"]
