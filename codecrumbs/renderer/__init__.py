"""Renderers turning generated Markdown into other representations."""

from .github import GithubRenderer

__all__ = ["GithubRenderer"]
