from __future__ import annotations

import json

import pytest
import requests

from seo_audit_agent.config import AgentConfig

SERPAPI_URL = "https://serpapi.test/search.json"
MOZ_URL = "https://moz.test/v2/url_metrics"
GEMINI_BASE_URL = "https://gemini.test/v1beta"

SERP_PAYLOAD = {
    "search_information": {"total_results": 1280},
    "organic_results": [
        {"title": "Home", "snippet": "Welcome to Example."},
        {"title": "Blog", "snippet": "Latest posts."},
        {"title": "Shop", "snippet": "Buy things."},
        {"title": "About", "snippet": "Who we are."},
    ],
}

MOZ_PAYLOAD = {
    "results": [
        {"domain_authority": 48, "linking_root_domains": 913, "spam_score": 3}
    ]
}

REPORT_TEXT = (
    '{"seoHealth":72,"strengths":["Good site structure."],'
    '"weaknesses":[],"suggestions":["Add more backlinks."]}'
)


def make_response(status_code: int, payload: object) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


def gemini_payload(text: str) -> dict[str, object]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeUpstreams:
    """Routes patched ``requests.get``/``requests.post`` calls to canned responses."""

    def __init__(self) -> None:
        self.serp_response = make_response(200, SERP_PAYLOAD)
        self.moz_response = make_response(200, MOZ_PAYLOAD)
        self.gemini_response = make_response(200, gemini_payload(REPORT_TEXT))
        self.calls: list[str] = []
        self.gemini_prompts: list[str] = []

    def get(self, url: str, **kwargs: object) -> requests.Response:
        self.calls.append(url)
        if url == SERPAPI_URL:
            return self.serp_response
        raise AssertionError(f"Unexpected GET: {url}")

    def post(self, url: str, **kwargs: object) -> requests.Response:
        self.calls.append(url)
        if url == MOZ_URL:
            return self.moz_response
        if url.startswith(GEMINI_BASE_URL):
            body = kwargs["json"]
            self.gemini_prompts.append(body["contents"][0]["parts"][0]["text"])
            return self.gemini_response
        raise AssertionError(f"Unexpected POST: {url}")


@pytest.fixture
def agent_config() -> AgentConfig:
    return AgentConfig(
        serpapi_key="serp_test",
        serpapi_endpoint=SERPAPI_URL,
        serpapi_engine="google",
        serpapi_num_results=10,
        moz_api_base64="bW96OnRlc3Q=",
        moz_endpoint=MOZ_URL,
        gemini_api_key="gem_test",
        gemini_api_base_url=GEMINI_BASE_URL,
        gemini_model="gemini-1.5-flash-latest",
        gemini_temperature=0.2,
        gemini_json_mode=True,
        http_timeout_sec=5,
        server_host="127.0.0.1",
        server_port=3000,
        cors_allow_origins=("*",),
    )


@pytest.fixture
def upstreams(monkeypatch: pytest.MonkeyPatch) -> FakeUpstreams:
    fake = FakeUpstreams()
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(requests, "post", fake.post)
    return fake
