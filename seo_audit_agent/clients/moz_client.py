from __future__ import annotations

from typing import Any

import requests
from requests import Response

from seo_audit_agent.models import SourceFailed, SourceOk, SourceResult


class MozClient:
    """Moz Links API client for URL-level authority metrics."""

    SOURCE_NAME = "Moz API"

    def __init__(
        self,
        *,
        api_base64: str,
        endpoint: str = "https://lsapi.seomoz.com/v2/url_metrics",
        timeout_sec: int = 30,
    ) -> None:
        self.api_base64 = self._normalize_credential(api_base64)
        self.endpoint = endpoint.strip()
        self.timeout_sec = max(1, int(timeout_sec))

    @staticmethod
    def _normalize_credential(raw: str) -> str:
        credential = raw.strip().strip("'\"")
        if credential.lower().startswith("basic "):
            credential = credential[6:].strip()
        return credential

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Basic {self.api_base64}",
        }

    @staticmethod
    def _error_body(response: Response) -> str:
        try:
            return response.text.strip()[:500]
        except Exception:  # noqa: BLE001
            return ""

    def fetch(self, url: str) -> SourceResult[dict[str, Any]]:
        try:
            response = requests.post(
                self.endpoint,
                json={"targets": [url.strip()]},
                headers=self._headers(),
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
