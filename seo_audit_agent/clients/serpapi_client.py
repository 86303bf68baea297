from __future__ import annotations

from typing import Any

import requests
from requests import Response

from seo_audit_agent.models import SourceFailed, SourceOk, SourceResult


class SerpApiClient:
    """SerpApi search client scoped to a single site via the ``site:`` operator."""

    SOURCE_NAME = "SerpApi"

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str = "https://serpapi.com/search.json",
        engine: str = "google",
        num_results: int = 10,
        timeout_sec: int = 30,
    ) -> None:
        self.api_key = api_key.strip()
        self.endpoint = endpoint.strip()
        self.engine = engine.strip()
        self.num_results = max(1, int(num_results))
        self.timeout_sec = max(1, int(timeout_sec))

    @staticmethod
    def site_query(url: str) -> str:
        return f"site:{url.strip()}"

    def _params(self, url: str) -> dict[str, object]:
        params: dict[str, object] = {
            "q": self.site_query(url),
            "api_key": self.api_key,
            "num": self.num_results,
        }
        if self.engine:
            params["engine"] = self.engine
        return params

    @staticmethod
    def _error_body(response: Response) -> str:
        try:
            return response.text.strip()[:500]
        except Exception:  # noqa: BLE001
            return ""

    def fetch(self, url: str) -> SourceResult[dict[str, Any]]:
        try:
            response = requests.get(
                self.endpoint,
                params=self._params(url),
                headers={"Accept": "application/json"},
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            return SourceFailed(f"{self.SOURCE_NAME} request failed: {exc}")

        if not 200 <= response.status_code < 300:
            return SourceFailed(
                f"{self.SOURCE_NAME} error: {response.status_code} - {self._error_body(response)}"
            )

        try:
            payload = response.json()
        except ValueError:
            return SourceFailed(f"{self.SOURCE_NAME} returned a non-JSON body.")
        if not isinstance(payload, dict):
            return SourceFailed(f"{self.SOURCE_NAME} returned an unexpected payload type.")
        return SourceOk(payload)
