"""Shared helper utilities used across services."""

from __future__ import annotations

import re
from typing import Final, List

_PUNCTUATION_RE: Final = re.compile(r"[^\w\s]+|_+")
_WHITESPACE_RE: Final = re.compile(r"\s+")

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def strip_think_blocks(text: str) -> str:
    """Extract content after the closing </think> tag from an LLM response.

    Handles missing tags and safely removes JSON code fences if present.
    """
    if not text:
        return text.strip()

    marker: Final[str] = "</think>"
    idx: int = text.rfind(marker)

    # Fallback to full text if marker is missing
    after: str = text if idx == -1 else text[idx + len(marker) :]

    cleaned: str = after.strip()

    # Remove JSON code fences if present
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json") :].strip()
    if cleaned.startswith("```"):
        cleaned = cleaned[3:].strip()
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3].strip()

    return cleaned


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    """Cut *text* to *limit* characters, appending *suffix* when shortened."""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def tokenize(text: str, min_length: int = 2) -> List[str]:
    """Lower-case *text*, replace punctuation by spaces and split into words.

    Letters and digits of any script are kept, so Polish diacritics survive.
    Tokens shorter than *min_length* are dropped.
    """
    if not text:
        return []
    cleaned = _PUNCTUATION_RE.sub(" ", text.lower())
    return [word for word in cleaned.split() if len(word) >= min_length]


__all__ = ["strip_think_blocks", "normalize_whitespace", "truncate", "tokenize"]
