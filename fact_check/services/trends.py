"""Trending words among recent, unflagged posts.

Rankings are recomputed from scratch on every call; nothing is persisted
between calls, so ``rank_recent_trends`` is a pure function of the records,
the reference time and the configuration.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..models.content import ContentRecord
from ..models.trend import RankedWord, WordCount
from ..utils.text_cleaning import tokenize

logger = logging.getLogger(__name__)

# Basic Polish and English stop words
BASE_STOP_WORDS: frozenset[str] = frozenset(
    {
        "i", "oraz", "jak", "czy", "a", "w", "z", "na", "do", "to",
        "the", "and", "or", "of", "in", "is", "it", "that", "this", "for",
        "się", "jest", "co", "tak", "ale", "tylko", "też", "być", "był",
        "była", "było", "on", "ona", "oni", "one", "jego", "jej", "ich",
        "ten", "ta", "ci", "te", "jakiś", "jakaś", "jakieś", "który", "która",
    }
)

# Shorter list used for the all-time word counts; "fake" and "news" are
# noise there because operators type them into almost every post
TOP_WORDS_STOP_WORDS: frozenset[str] = frozenset(
    {
        "i", "oraz", "jak", "czy", "a", "w", "z", "na", "do", "to",
        "the", "and", "or", "of", "in", "is", "it", "that", "this", "for",
        "fake", "news",
    }
)

MAX_RECORD_IDS: int = 10


@dataclass(frozen=True, slots=True)
class TrendConfig:
    window_minutes: float = 60
    top_n: int = 10
    min_occurrences: int = 1
    extra_stop_words: Sequence[str] = ()


@dataclass(slots=True)
class _Accumulator:
    occurrences: int
    first_seen: datetime
    last_seen: datetime
    record_ids: List[str]


def _stop_words(base: Iterable[str], extra: Iterable[str]) -> Set[str]:
    return set(base) | {word.lower() for word in extra}


def rank_recent_trends(
    records: Iterable[ContentRecord],
    now: Optional[datetime] = None,
    config: TrendConfig = TrendConfig(),
) -> List[RankedWord]:
    """Rank words by momentum across unflagged records inside the window.

    A word counts once per record. ``momentum = occurrences / (age + 1)``
    where *age* is the minutes since the word was first seen, so words that
    appear as often but more recently rank higher.
    """
    now = now or datetime.now(tz=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    window_start = now - timedelta(minutes=config.window_minutes)
    stop_words = _stop_words(BASE_STOP_WORDS, config.extra_stop_words)

    acc: Dict[str, _Accumulator] = {}
    for record in records:
        if record.is_fake is True or not record.text:
            continue
        ts = record.created_at
        if ts is None:
            continue
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        if ts < window_start or ts > now:
            continue

        seen_in_record: Set[str] = set()
        for word in tokenize(record.text):
            if word in stop_words or word in seen_in_record:
                continue
            seen_in_record.add(word)

            entry = acc.get(word)
            if entry is None:
                acc[word] = _Accumulator(1, ts, ts, [record.id])
                continue
            entry.occurrences += 1
            entry.first_seen = min(entry.first_seen, ts)
            entry.last_seen = max(entry.last_seen, ts)
            if record.id not in entry.record_ids:
                entry.record_ids.append(record.id)

    items: List[RankedWord] = []
    for word, entry in acc.items():
        if entry.occurrences < config.min_occurrences:
            continue
        age_minutes = (now - entry.first_seen).total_seconds() / 60
        items.append(
            RankedWord(
                word=word,
                occurrences=entry.occurrences,
                first_seen=entry.first_seen,
                last_seen=entry.last_seen,
                age_minutes=age_minutes,
                momentum=entry.occurrences / (age_minutes + 1),
                rate_per_minute=entry.occurrences / (age_minutes + 1 / 60),
                record_ids=entry.record_ids[:MAX_RECORD_IDS],
            )
        )

    items.sort(key=lambda i: (i.momentum, i.occurrences, i.last_seen), reverse=True)
    top = items[: config.top_n]

    max_momentum = max((i.momentum for i in top), default=0.0) or 1.0
    for item in top:
        item.normalized_momentum = min(100.0, item.momentum / max_momentum * 100)

    logger.debug("Ranked %d trending words (%d candidates)", len(top), len(items))
    return top


def top_words(
    texts: Iterable[str],
    top_n: int = 3,
    extra_stop_words: Iterable[str] = (),
) -> List[WordCount]:
    """Return the *top_n* most frequent words across *texts*."""
    stop_words = _stop_words(TOP_WORDS_STOP_WORDS, extra_stop_words)
    counts: Counter[str] = Counter()
    for text in texts:
        if not text:
            continue
        counts.update(w for w in tokenize(text) if w not in stop_words)

    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [WordCount(word=w, count=c) for w, c in ranked[:top_n]]

__all__ = [
    "BASE_STOP_WORDS",
    "TOP_WORDS_STOP_WORDS",
    "TrendConfig",
    "rank_recent_trends",
    "top_words",
]
