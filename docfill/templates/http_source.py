from urllib.parse import quote

import httpx

from docfill.templates.base import BaseTemplateSource
from docfill.templates.exceptions import TemplateNotFound


class HttpTemplateSource(BaseTemplateSource):
    """Fetches templates over HTTP with an explicit timeout."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._client = client or httpx.Client(timeout=timeout_seconds, follow_redirects=True)

    def fetch(self, name: str) -> bytes:
        url = self._base_url + quote(name)
        try:
            response = self._client.get(url, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise TemplateNotFound(f"Template fetch failed for {url}: {exc}") from exc
        if not response.is_success:
            raise TemplateNotFound(f"Template fetch for {url} returned {response.status_code}")
        return response.content

    def close(self) -> None:
        self._client.close()
