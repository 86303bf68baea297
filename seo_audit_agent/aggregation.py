from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from seo_audit_agent.models import (
    AuthoritySignal,
    CombinedSignal,
    SearchResultItem,
    SearchSignal,
    SourceFailed,
    SourceOk,
    SourceResult,
)

MAX_TOP_RESULTS = 3

SEARCH_SOURCE = "search"
AUTHORITY_SOURCE = "authority"


def _is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _as_number(payload: dict[str, Any], key: str) -> float | int:
    value = payload.get(key)
    return value if _is_number(value) else 0


def _as_count(value: object) -> int:
    if not _is_number(value):
        return 0
    count = int(value)
    return count if count >= 0 else 0


def _as_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_search_payload(payload: dict[str, Any]) -> SearchSignal:
    search_information = payload.get("search_information")
    total_results = (
        search_information.get("total_results")
        if isinstance(search_information, dict)
        else None
    )

    organic_results = payload.get("organic_results")
    if not isinstance(organic_results, list):
        organic_results = []

    top_results: list[SearchResultItem] = []
    for row in organic_results:
        if len(top_results) >= MAX_TOP_RESULTS:
            break
        if not isinstance(row, dict):
            continue
        top_results.append(
            SearchResultItem(title=_as_text(row.get("title")), snippet=_as_text(row.get("snippet")))
        )

    return SearchSignal(result_count=_as_count(total_results), top_results=tuple(top_results))


def normalize_authority_payload(payload: dict[str, Any]) -> AuthoritySignal:
    results = payload.get("results")
    metrics = results[0] if isinstance(results, list) and results else {}
    if not isinstance(metrics, dict):
        metrics = {}
    return AuthoritySignal(
        domain_authority=_as_number(metrics, "domain_authority"),
        linking_root_domains=_as_count(metrics.get("linking_root_domains")),
        spam_score=_as_number(metrics, "spam_score"),
    )


def _settle(fetch: Callable[[str], SourceResult], url: str) -> SourceResult:
    # Clients already convert failures; this also catches anything that slips past them.
    try:
        return fetch(url)
    except Exception as exc:  # noqa: BLE001
        return SourceFailed(f"Unexpected source error: {exc}")


def collect_signals(url: str, search_client, authority_client) -> CombinedSignal:
    """Fetch both sources concurrently and merge them, degrading per source.

    A failed source is replaced by its fallback default. The failure reason is
    printed and kept on ``CombinedSignal.failures``. This never raises for
    upstream problems.
    """
    print("Fetching SerpApi and Moz data...")
    executor = ThreadPoolExecutor(max_workers=2)
    try:
        future_search = executor.submit(_settle, search_client.fetch, url)
        future_authority = executor.submit(_settle, authority_client.fetch, url)
        search_result = future_search.result()
        authority_result = future_authority.result()
    finally:
        executor.shutdown(wait=True)

    failures: dict[str, str] = {}

    search = SearchSignal()
    if isinstance(search_result, SourceOk):
        search = normalize_search_payload(search_result.payload)
    else:
        failures[SEARCH_SOURCE] = search_result.reason

    authority = AuthoritySignal()
    if isinstance(authority_result, SourceOk):
        authority = normalize_authority_payload(authority_result.payload)
    else:
        failures[AUTHORITY_SOURCE] = authority_result.reason

    signal = CombinedSignal(search=search, authority=authority, failures=failures)
    if signal.degraded:
        for source, reason in signal.failures.items():
            print(f"Source degraded to fallback: {source} | {reason}")
    else:
        print("All signal sources returned data.")
    return signal
