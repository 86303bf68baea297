from __future__ import annotations

import os
from dataclasses import dataclass


def _env(name: str, default: str = "") -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default.strip()
    value = raw.strip()
    placeholder = f"{name}="
    unquoted = value.strip("'\"").strip()
    if unquoted.lower() == placeholder.lower():
        return default.strip()
    return value if value else default.strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    return int(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_csv(name: str, default: str = "") -> tuple[str, ...]:
    raw = _env(name, default)
    values = [part.strip() for part in raw.split(",") if part.strip()]
    return tuple(values)


@dataclass(frozen=True)
class AgentConfig:
    serpapi_key: str
    serpapi_endpoint: str
    serpapi_engine: str
    serpapi_num_results: int

    moz_api_base64: str
    moz_endpoint: str

    gemini_api_key: str
    gemini_api_base_url: str
    gemini_model: str
    gemini_temperature: float
    gemini_json_mode: bool

    http_timeout_sec: int
    server_host: str
    server_port: int
    cors_allow_origins: tuple[str, ...]

    @classmethod
    def from_env(cls) -> "AgentConfig":
        return cls(
            serpapi_key=_env("SERPAPI_KEY"),
            serpapi_endpoint=_env("SERPAPI_ENDPOINT", "https://serpapi.com/search.json"),
            serpapi_engine=_env("SERPAPI_ENGINE", "google"),
            serpapi_num_results=max(1, _env_int("SERPAPI_NUM_RESULTS", 10)),
            moz_api_base64=_env("MOZ_API_BASE64"),
            moz_endpoint=_env("MOZ_ENDPOINT", "https://lsapi.seomoz.com/v2/url_metrics"),
            gemini_api_key=_env("GEMINI_API_KEY"),
            gemini_api_base_url=_env(
                "GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
            ),
            gemini_model=_env("GEMINI_MODEL", "gemini-1.5-flash-latest"),
            gemini_temperature=_env_float("GEMINI_TEMPERATURE", 0.2),
            gemini_json_mode=_env_bool("GEMINI_JSON_MODE", True),
            http_timeout_sec=max(1, _env_int("HTTP_TIMEOUT_SEC", 30)),
            server_host=_env("SERVER_HOST", "127.0.0.1"),
            server_port=_env_int("SERVER_PORT", 3000),
            cors_allow_origins=_env_csv("CORS_ALLOW_ORIGINS", "*") or ("*",),
        )

    @property
    def serpapi_enabled(self) -> bool:
        return bool(self.serpapi_key and self.serpapi_endpoint)

    @property
    def moz_enabled(self) -> bool:
        return bool(self.moz_api_base64 and self.moz_endpoint)

    @property
    def gemini_enabled(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_model)

    def credential_status(self) -> list[str]:
        # Reported at startup only; missing credentials surface later as upstream failures.
        rows = (
            ("SERPAPI_KEY", self.serpapi_key),
            ("MOZ_API_BASE64", self.moz_api_base64),
            ("GEMINI_API_KEY", self.gemini_api_key),
        )
        return [f"{name} Loaded: {'Yes' if value else 'No'}" for name, value in rows]
