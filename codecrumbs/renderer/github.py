"""Markdown to HTML conversion through the GitHub Markdown API."""

from __future__ import annotations

import base64
import json
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

MODE_GFM = "gfm"
MODE_MARKDOWN = "markdown"


class GithubRenderer:
    """Posts Markdown documents to GitHub and returns the rendered HTML."""

    API_URL = "https://api.github.com/markdown"

    def __init__(
        self,
        project_name: str,
        client_id: str | None = None,
        client_secret: str | None = None,
        *,
        api_url: str | None = None,
        request_timeout: Optional[float] = 30.0,
    ) -> None:
        self.project_name = project_name
        self.client_id = client_id or None
        self.client_secret = client_secret or None
        self.api_url = api_url or self.API_URL
        self.request_timeout = request_timeout

    def render_gfm(self, markdown: str) -> str:
        """Render as GitHub Flavored Markdown in the context of the project."""
        payload: dict[str, object] = {"text": markdown, "mode": MODE_GFM}
        if self.project_name:
            payload["context"] = self.project_name
        return self._post(payload)

    def render_readme(self, markdown: str) -> str:
        """Render the way GitHub renders README files."""
        return self._post({"text": markdown, "mode": MODE_MARKDOWN})

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/vnd.github+json",
        }
        if self.client_id and self.client_secret:
            token = f"{self.client_id}:{self.client_secret}".encode("utf-8")
            headers["Authorization"] = "Basic " + base64.b64encode(token).decode("ascii")
        return headers

    def _post(self, payload: dict[str, object]) -> str:
        data = json.dumps(payload).encode("utf-8")
        request = Request(self.api_url, data=data, headers=self._headers(), method="POST")
        timeout = self.request_timeout or 30.0
        try:
            with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise RuntimeError(
                f"GitHub Markdown API failed with status {exc.code}: {message}"
            ) from exc
        except URLError as exc:
            raise RuntimeError(f"GitHub Markdown API request failed: {exc.reason}") from exc
        return raw.decode("utf-8")


__all__ = ["GithubRenderer", "MODE_GFM", "MODE_MARKDOWN"]
