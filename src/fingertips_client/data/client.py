"""HTTP client for the Fingertips REST API."""

import io
import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any
from urllib.parse import urljoin

import pandas as pd
import requests
import structlog
from attrs import define, field

from .endpoints import BASE_URL

logger = structlog.get_logger(__name__)


@define(slots=True)
class FingertipsHttpClient:
    """Thin HTTP wrapper around the Fingertips JSON and CSV endpoints.

    ``verify`` controls TLS certificate verification. It defaults to on; pass
    ``verify=False`` only where the legacy unverified behaviour is required.
    """

    base_url: str = BASE_URL
    timeout: float = 30.0
    verify: bool = True
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {
            "User-Agent": "fingertips-client",
            "Accept": "application/json,text/csv,text/plain,*/*;q=0.1",
        },
    )

    def get_text(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        encoding: str = "utf-8",
    ) -> str:
        """Fetch a Fingertips resource and return its decoded text payload."""
        url = urljoin(self.base_url, path)
        log = logger.bind(path=path, url=url, params=dict(params or {}))
        log.debug("http.fetch_start", timeout=self.timeout, verify=self.verify)
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                headers=self.headers,
                verify=self.verify,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("http.fetch_failed", status=status, exc_info=True)
            raise
        response.encoding = encoding
        log.debug("http.fetch_success", bytes=len(response.content))
        return response.text

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Fetch a JSON endpoint and return the decoded document."""
        text = self.get_text(path, params)
        return json.loads(text)

    def get_csv(self, path: str, params: Mapping[str, Any] | None = None) -> pd.DataFrame:
        """Fetch a CSV endpoint into a DataFrame; an empty body yields an empty frame."""
        text = self.get_text(path, params)
        if not text.strip():
            return pd.DataFrame()
        return pd.read_csv(io.StringIO(text))

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


@contextmanager
def open_client(client: FingertipsHttpClient | None = None) -> Iterator[FingertipsHttpClient]:
    """Yield ``client`` unchanged, or a fresh client that is closed on exit."""
    if client is not None:
        yield client
        return
    owned = FingertipsHttpClient()
    try:
        yield owned
    finally:
        owned.close()


__all__ = ["FingertipsHttpClient", "open_client"]
