from __future__ import annotations

import json

import pytest

from conftest import make_response
from seo_audit_agent import main as main_module


def test_default_command_is_serve() -> None:
    args = main_module._parse_args([])
    assert args.command == "serve"
    assert args.host is None
    assert args.port is None


def test_serve_accepts_host_and_port() -> None:
    args = main_module._parse_args(["serve", "--host", "0.0.0.0", "--port", "8080"])
    assert args.host == "0.0.0.0"
    assert args.port == 8080


def test_analyze_prints_response_json(agent_config, upstreams, monkeypatch, capsys) -> None:
    monkeypatch.setattr(main_module.AgentConfig, "from_env", classmethod(lambda cls: agent_config))
    monkeypatch.setattr(main_module, "load_dotenv", lambda *args, **kwargs: False)

    main_module.main(["analyze", "--url", "example.com"])

    out = capsys.readouterr().out
    assert "SERPAPI_KEY Loaded: Yes" in out
    payload = json.loads(out[out.index("{\n"):])
    assert payload["analysis"]["seoHealth"] == 72


def test_analyze_failure_exits_non_zero(agent_config, upstreams, monkeypatch) -> None:
    upstreams.gemini_response = make_response(502, {"error": "bad gateway"})
    monkeypatch.setattr(main_module.AgentConfig, "from_env", classmethod(lambda cls: agent_config))
    monkeypatch.setattr(main_module, "load_dotenv", lambda *args, **kwargs: False)

    with pytest.raises(SystemExit) as error:
        main_module.main(["analyze", "--url", "example.com"])

    assert "UpstreamError" in str(error.value)
