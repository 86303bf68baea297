from __future__ import annotations

import pytest

from seo_audit_agent.models import AnalysisReport
from seo_audit_agent.report_parser import ParseError, clean_sentence, parse_analysis_report

VALID = (
    '{"seoHealth":72,"strengths":["Good site structure."],'
    '"weaknesses":[],"suggestions":["Add more backlinks."]}'
)


def test_parses_valid_report() -> None:
    report = parse_analysis_report(VALID)
    assert report == AnalysisReport(
        seo_health=72,
        strengths=("Good site structure.",),
        weaknesses=(),
        suggestions=("Add more backlinks.",),
    )


def test_parse_is_idempotent() -> None:
    assert parse_analysis_report(VALID) == parse_analysis_report(VALID)


def test_surrounding_whitespace_is_tolerated() -> None:
    assert parse_analysis_report(f"\n\n  {VALID}  \n").seo_health == 72


def test_fenced_json_block_is_located() -> None:
    raw = f"```json\n{VALID}\n```"
    assert parse_analysis_report(raw).suggestions == ("Add more backlinks.",)


def test_absent_list_fields_become_empty() -> None:
    report = parse_analysis_report('{"seoHealth": 55, "strengths": ["Fast pages."]}')
    assert report.weaknesses == ()
    assert report.suggestions == ()


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "The site looks healthy overall.",
        '{"strengths": ["Good."], "weaknesses": [], "suggestions": []}',
        '{"seoHealth": 70, "strengths": "Good site structure."}',
        '{"seoHealth": "72"}',
        '{"seoHealth": true}',
        '{"seoHealth": null}',
        '{"seoHealth": 70, "weaknesses": ["Slow.", null]}',
        '{"seoHealth": 70, "suggestions": [1, 2]}',
        "[72]",
        '{"seoHealth": 72,',
        '{"seoHealth": 40, "strengths": ["Good."], "details": {"seoHealth": 99}',
        'Report: {"seoHealth": 40, "extra": {"seoHealth": 99}',
    ],
)
def test_rejects_malformed_output(raw: str) -> None:
    with pytest.raises(ParseError):
        parse_analysis_report(raw)


def test_markup_is_stripped_from_sentences() -> None:
    raw = (
        '{"seoHealth": 64.6, "strengths": ["- **Strong** domain authority.", "2. Clean URLs."],'
        ' "weaknesses": ["* ", "Few backlinks."], "suggestions": null}'
    )
    report = parse_analysis_report(raw)
    assert report.seo_health == 65
    assert report.strengths == ("Strong domain authority.", "Clean URLs.")
    assert report.weaknesses == ("Few backlinks.",)
    assert report.suggestions == ()


def test_seo_health_is_not_clamped() -> None:
    assert parse_analysis_report('{"seoHealth": 140}').seo_health == 140


def test_clean_sentence_handles_stacked_markers() -> None:
    assert clean_sentence("  - 1. **Add** alt text.  ") == "Add alt text."


def test_prose_before_the_object_is_tolerated() -> None:
    assert parse_analysis_report(f"Here is the report: {VALID}").seo_health == 72


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Rename the `__init__` hook.", "Rename the __init__ hook."),
        ("Keep __init__ modules small.", "Keep __init__ modules small."),
        ("Reviews average 5* on most pages.", "Reviews average 5* on most pages."),
        ("Use *descriptive* anchor text.", "Use descriptive anchor text."),
        ("**Improve page speed.**", "Improve page speed."),
        ("-", ""),
    ],
)
def test_clean_sentence_only_strips_markup(text: str, expected: str) -> None:
    assert clean_sentence(text) == expected
