from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class SourceOk(Generic[T]):
    payload: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SourceFailed:
    reason: str

    @property
    def ok(self) -> bool:
        return False


SourceResult = Union[SourceOk[T], SourceFailed]


@dataclass(frozen=True)
class SearchResultItem:
    title: str
    snippet: str


@dataclass(frozen=True)
class SearchSignal:
    result_count: int = 0
    top_results: tuple[SearchResultItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "resultCount": self.result_count,
            "topResults": [
                {"title": item.title, "snippet": item.snippet} for item in self.top_results
            ],
        }


@dataclass(frozen=True)
class AuthoritySignal:
    domain_authority: float = 0
    linking_root_domains: int = 0
    spam_score: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "domainAuthority": self.domain_authority,
            "linkingRootDomains": self.linking_root_domains,
            "spamScore": self.spam_score,
        }

    def to_response_dict(self) -> dict[str, Any]:
        return {
            "domainAuthority": self.domain_authority,
            "backlinks": self.linking_root_domains,
            "spamScore": self.spam_score,
        }


@dataclass(frozen=True)
class CombinedSignal:
    """Merged upstream signals; each part is either real data or its fallback."""

    search: SearchSignal = field(default_factory=SearchSignal)
    authority: AuthoritySignal = field(default_factory=AuthoritySignal)
    # Source name -> failure reason. Diagnostics only, never sent to the model.
    failures: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def degraded(self) -> bool:
        return bool(self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "search": self.search.to_dict(),
            "authority": self.authority.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisReport:
    seo_health: int
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "seoHealth": self.seo_health,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class AnalysisResponse:
    analysis: AnalysisReport
    authority: AuthoritySignal

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis": self.analysis.to_dict(),
            "authority": self.authority.to_response_dict(),
        }
