from __future__ import annotations

import json

from langchain_core.prompts import PromptTemplate

from seo_audit_agent.models import CombinedSignal

ANALYSIS_PROMPT_TEMPLATE = """Act as an expert SEO analyst. Analyze the following SEO data for the URL "{url}".

The data is:
{signal_json}

Field notes:
- search.resultCount: number of pages indexed for the site (0 means unknown or none).
- search.topResults: up to 3 top organic results for the site.
- authority.domainAuthority: Moz Domain Authority (0-100).
- authority.linkingRootDomains: number of unique root domains linking to the site.
- authority.spamScore: Moz Spam Score (0-100, higher is worse).
A value of 0 may mean the data source was unavailable; do not treat it as a confirmed fact.

Respond with a single JSON object and nothing else, using exactly this shape:
{{
  "seoHealth": <integer from 0 to 100, overall SEO health based on the data>,
  "strengths": [<string>, ...],
  "weaknesses": [<string>, ...],
  "suggestions": [<string>, ...]
}}

Rules:
- Output JSON only. No prose before or after it and no code fences or markdown.
- "strengths": 2-3 key strengths based on the data.
- "weaknesses": 2-3 key weaknesses based on the data.
- "suggestions": 3-4 specific, actionable suggestions that address the weaknesses.
- Every string must be one complete plain sentence. Do not start with numbers, bullets, dashes or asterisks, and do not use markdown emphasis.
- If nothing applies to a list, return it as an empty array []. Never omit a key and never use null.
"""

_ANALYSIS_PROMPT = PromptTemplate.from_template(ANALYSIS_PROMPT_TEMPLATE)


def serialize_signal(signal: CombinedSignal) -> str:
    return json.dumps(signal.to_dict(), indent=2, ensure_ascii=False)


def build_analysis_prompt(url: str, signal: CombinedSignal) -> str:
    return _ANALYSIS_PROMPT.format(url=url.strip(), signal_json=serialize_signal(signal))
