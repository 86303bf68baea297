from __future__ import annotations

from typing import Any

import requests
from requests import Response


class UpstreamError(RuntimeError):
    """Generative-text service returned a non-success status or was unreachable."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeminiClient:
    """Single-shot client for the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-1.5-flash-latest",
        api_base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        temperature: float = 0.2,
        json_mode: bool = True,
        timeout_sec: int = 30,
    ) -> None:
        self.api_key = api_key.strip()
        self.model = model.strip()
        self.api_base_url = api_base_url.rstrip("/")
        self.temperature = float(temperature)
        self.json_mode = json_mode
        self.timeout_sec = max(1, int(timeout_sec))

    @property
    def generate_url(self) -> str:
        model = self.model
        if model.startswith("models/"):
            model = model[len("models/"):]
        return f"{self.api_base_url}/models/{model}:generateContent"

    def _request_body(self, prompt: str) -> dict[str, Any]:
        generation_config: dict[str, Any] = {"temperature": self.temperature}
        if self.json_mode:
            generation_config["responseMimeType"] = "application/json"
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    @staticmethod
    def _error_body(response: Response) -> str:
        try:
            return response.text.strip()[:500]
        except Exception:  # noqa: BLE001
            return ""

    @staticmethod
    def _extract_text(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        first = candidates[0]
        if not isinstance(first, dict):
            return ""
        content = first.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        chunks = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(chunks)

    def analyze(self, prompt: str) -> str:
        try:
            response = requests.post(
                self.generate_url,
                params={"key": self.api_key},
                json=self._request_body(prompt),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            raise UpstreamError(f"Gemini API request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise UpstreamError(
                f"Gemini API Error: {response.status_code} - {self._error_body(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Gemini API returned a non-JSON body.", status_code=response.status_code
            ) from exc

        text = self._extract_text(payload)
        if not text.strip():
            raise UpstreamError(
                "Gemini API response has no candidate text.", status_code=response.status_code
            )
        return text
