from __future__ import annotations

import json
import math
import re

from seo_audit_agent.models import AnalysisReport

LIST_FIELDS = ("strengths", "weaknesses", "suggestions")

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", flags=re.DOTALL | re.IGNORECASE)
_LEADING_MARKER = re.compile(r"^(?:[-*+•▪●](?:\s+|$)|\(?\d{1,3}[.)]\s+)")
_PAIRED_EMPHASIS = re.compile(r"(?<!\w)(\*\*|\*|`)(?=\S)(.+?)(?<=\S)\1(?!\w)")
_EDGE_EMPHASIS = re.compile(r"^(?:\*\*|`)+|(?:\*\*|`)+$")


class ParseError(ValueError):
    """Generative output does not match the analysis report schema."""


def _locate_json_object(raw: str) -> dict[str, object]:
    text = (raw or "").strip()
    if not text:
        raise ParseError("Model output is empty.")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = None
    else:
        if isinstance(parsed, dict):
            return parsed
        raise ParseError(f"Model output is JSON but not an object: {type(parsed).__name__}.")

    for block in _FENCED_JSON.findall(text):
        try:
            parsed = json.loads(block)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    start = text.find("{")
    if start < 0:
        raise ParseError("No JSON object found in model output.")
    # Only the outermost object counts; nested objects of a broken payload are never promoted.
    try:
        parsed, _ = json.JSONDecoder().raw_decode(text[start:])
    except json.JSONDecodeError as exc:
        raise ParseError(f"Model output is not valid JSON: {exc}") from exc
    return parsed


def _parse_seo_health(payload: dict[str, object]) -> int:
    if "seoHealth" not in payload:
        raise ParseError("Missing required field: seoHealth.")
    value = payload["seoHealth"]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"seoHealth must be a number, got {type(value).__name__}.")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParseError("seoHealth must be a finite number.")
        return int(round(value))
    return value


def clean_sentence(text: str) -> str:
    cleaned = re.sub(r"\s+", " ", text).strip()
    # Markers can be stacked, e.g. "- 1. **Fast pages.**"
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _PAIRED_EMPHASIS.sub(r"\2", cleaned)
        cleaned = _EDGE_EMPHASIS.sub("", cleaned).strip()
        cleaned = _LEADING_MARKER.sub("", cleaned).strip()
    return cleaned


def _parse_sentences(payload: dict[str, object], key: str) -> tuple[str, ...]:
    value = payload.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ParseError(f"{key} must be an array of strings, got {type(value).__name__}.")

    sentences: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise ParseError(f"{key}[{idx}] must be a string, got {type(item).__name__}.")
        sentence = clean_sentence(item)
        if sentence:
            sentences.append(sentence)
    return tuple(sentences)


def parse_analysis_report(raw: str) -> AnalysisReport:
    payload = _locate_json_object(raw)
    return AnalysisReport(
        seo_health=_parse_seo_health(payload),
        strengths=_parse_sentences(payload, "strengths"),
        weaknesses=_parse_sentences(payload, "weaknesses"),
        suggestions=_parse_sentences(payload, "suggestions"),
    )
