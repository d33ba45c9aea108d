"""Exception types raised by the service layer."""

from __future__ import annotations


class FactCheckError(Exception):
    """Base class for all errors raised by fact_check."""


class InvalidInputError(FactCheckError, ValueError):
    """Missing, empty or non-string input rejected before any external call."""


class RecordNotFoundError(FactCheckError, LookupError):
    """The requested post or keyword does not exist."""


class DuplicateContentError(FactCheckError):
    """A post is (near-)identical to one already stored."""

    def __init__(self, record_id: str, score: float) -> None:
        super().__init__(f"Content duplicates post {record_id} (similarity {score:.4f})")
        self.record_id = record_id
        self.score = score


class DuplicateKeywordError(FactCheckError):
    """The keyword is already on the watch list."""


__all__ = [
    "FactCheckError",
    "InvalidInputError",
    "RecordNotFoundError",
    "DuplicateContentError",
    "DuplicateKeywordError",
]
