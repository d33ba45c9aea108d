"""Domain models used across the project."""

from .content import (  # noqa: F401
    ContentRecord,
    Embedding,
    EvaluationVerdict,
    MatchType,
    SimilarityMatch,
    UrlCheckResult,
    UrlStatus,
    make_title,
)
from .keyword import Keyword  # noqa: F401
from .trend import RankedWord, WordCount  # noqa: F401

__all__ = [
    "ContentRecord",
    "Embedding",
    "EvaluationVerdict",
    "MatchType",
    "SimilarityMatch",
    "UrlCheckResult",
    "UrlStatus",
    "make_title",
    "Keyword",
    "RankedWord",
    "WordCount",
]
