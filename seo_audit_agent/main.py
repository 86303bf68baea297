from __future__ import annotations

import argparse
import json
from dataclasses import replace

import uvicorn
from dotenv import find_dotenv, load_dotenv

from seo_audit_agent.config import AgentConfig
from seo_audit_agent.server import create_app
from seo_audit_agent.workflow import run_analysis


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SEO Audit Agent")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API (default).")
    serve.add_argument("--host", help="Bind host (default: SERVER_HOST or 127.0.0.1).")
    serve.add_argument("--port", type=int, help="Bind port (default: SERVER_PORT or 3000).")

    analyze = subparsers.add_parser("analyze", help="Analyze one URL and print the JSON result.")
    analyze.add_argument("--url", required=True, help="Site or page URL to analyze.")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "serve"
        args.host = None
        args.port = None
    return args


def _print_credential_status(config: AgentConfig) -> None:
    for line in config.credential_status():
        print(line)


def _run_once(url: str, config: AgentConfig) -> None:
    try:
        result = run_analysis(url, config)
    except Exception as exc:  # noqa: BLE001
        raise SystemExit(f"Analysis failed: {type(exc).__name__}: {exc}")
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> None:
    try:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    except Exception:
        pass

    args = _parse_args(argv)
    config = AgentConfig.from_env()
    _print_credential_status(config)

    if args.command == "analyze":
        _run_once(args.url, config)
        return

    if args.host or args.port:
        config = replace(
            config,
            server_host=args.host or config.server_host,
            server_port=args.port or config.server_port,
        )
    app = create_app(config)
    print(f"Server is running on http://{config.server_host}:{config.server_port}")
    uvicorn.run(app, host=config.server_host, port=config.server_port)


if __name__ == "__main__":
    main()
