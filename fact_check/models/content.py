"""Content records and the results of comparing new content against them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional

# Type alias for 1536-dimensional embedding vector
Embedding = List[float]

MatchType = Literal["exact", "very-high", "high", "medium", "low", "none"]
UrlStatus = Literal["match", "unsure", "new"]

TITLE_LENGTH: int = 50


def make_title(text: str, length: int = TITLE_LENGTH) -> str:
    """Return the display label for *text*: its first *length* characters."""
    return text[:length] + ("..." if len(text) > length else "")


@dataclass(slots=True)
class ContentRecord:
    """A previously submitted post together with its embedding."""

    id: str
    text: str
    title: str = ""
    url: Optional[str] = None
    is_fake: Optional[bool] = None
    embedding: Embedding = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        text: str,
        embedding: Embedding,
        url: Optional[str] = None,
        is_fake: Optional[bool] = None,
    ) -> "ContentRecord":
        """Build a new record with a fresh id, derived title and current timestamp."""
        return cls(
            id=uuid.uuid4().hex,
            text=text,
            title=make_title(text),
            url=url or None,
            is_fake=is_fake,
            embedding=list(embedding),
            created_at=datetime.now(tz=timezone.utc),
        )


@dataclass(slots=True)
class SimilarityMatch:
    """One hit of a vector search, ordered by descending ``score``."""

    record_id: str
    score: float
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    is_fake: Optional[bool] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class EvaluationVerdict:
    """Outcome of evaluating one piece of text."""

    flagged: bool
    confidence: float
    reasoning: str
    match_type: MatchType = "none"
    similarity_score: float = 0.0


@dataclass(slots=True)
class UrlCheckResult:
    """Closest stored URL for a candidate URL.

    ``matched_url`` is only populated when ``warning`` is set.
    """

    similarity: float
    warning: bool
    status: UrlStatus = "new"
    matched_url: Optional[str] = None


__all__ = [
    "Embedding",
    "MatchType",
    "UrlStatus",
    "TITLE_LENGTH",
    "make_title",
    "ContentRecord",
    "SimilarityMatch",
    "EvaluationVerdict",
    "UrlCheckResult",
]
