"""Result types for word trend rankings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(slots=True)
class RankedWord:
    """A word trending inside the recency window."""

    word: str
    occurrences: int  # (record, word) pairs, deduplicated per record
    first_seen: datetime
    last_seen: datetime
    age_minutes: float
    momentum: float
    rate_per_minute: float
    normalized_momentum: float = 0.0
    record_ids: List[str] = field(default_factory=list)


@dataclass(slots=True)
class WordCount:
    word: str
    count: int


__all__ = ["RankedWord", "WordCount"]
