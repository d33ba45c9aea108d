"""Fuzzy matching of submitted URLs against the URLs of stored posts."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from ..config import URL_SIMILARITY_THRESHOLD, URL_UNSURE_THRESHOLD
from ..errors import InvalidInputError
from ..models.content import ContentRecord, UrlCheckResult
from .vector_store import PineconeVectorStore

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Reduce *url* to lower-cased ``host + path`` without trailing slashes.

    Strings that do not parse as an absolute URL are lower-cased as a whole.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname if parts.scheme else None
    except ValueError:
        hostname = None

    if hostname:
        normalized = f"{hostname.lower()}{parts.path.lower()}"
    else:
        normalized = url.lower()
    return normalized.rstrip("/")


def levenshtein_distance(a: str, b: str) -> int:
    """Classic dynamic-programming edit distance between *a* and *b*."""
    m, n = len(a), len(b)
    dp: List[List[int]] = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(
                    dp[i - 1][j - 1],  # substitution
                    dp[i - 1][j],  # deletion
                    dp[i][j - 1],  # insertion
                )
    return dp[m][n]


def url_similarity(url1: str, url2: str) -> float:
    """Return ``1 - distance / longest`` over the normalised URLs."""
    norm1 = normalize_url(url1)
    norm2 = normalize_url(url2)
    if norm1 == norm2:
        return 1.0
    distance = levenshtein_distance(norm1, norm2)
    return 1.0 - distance / max(len(norm1), len(norm2))


def find_similar_url(
    url: str,
    records: Iterable[ContentRecord],
    threshold: float = URL_SIMILARITY_THRESHOLD,
    unsure_threshold: float = URL_UNSURE_THRESHOLD,
) -> UrlCheckResult:
    """Scan *records* for the URL closest to *url*.

    The first record reaching the highest similarity wins ties.
    """
    highest = 0.0
    best: Optional[str] = None
    for record in records:
        if not record.url:
            continue
        similarity = url_similarity(url, record.url)
        if similarity > highest:
            highest = similarity
            best = record.url

    warning = highest >= threshold
    if warning:
        status = "match"
    elif highest >= unsure_threshold:
        status = "unsure"
    else:
        status = "new"
    return UrlCheckResult(
        similarity=highest,
        warning=warning,
        status=status,
        matched_url=best if warning else None,
    )


def check_url(
    store: PineconeVectorStore,
    url: Any,
    threshold: float = URL_SIMILARITY_THRESHOLD,
    unsure_threshold: float = URL_UNSURE_THRESHOLD,
) -> UrlCheckResult:
    """Compare *url* with every stored URL and report the closest one."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("URL is required and must be a string")

    logger.info("Checking URL similarity for %s", url)
    result = find_similar_url(url.strip(), store.scroll(with_vectors=False), threshold, unsure_threshold)
    logger.info("Highest URL similarity: %.2f%%", result.similarity * 100)
    if result.warning:
        logger.info("Matched URL: %s", result.matched_url)
    return result

__all__ = [
    "normalize_url",
    "levenshtein_distance",
    "url_similarity",
    "find_similar_url",
    "check_url",
]
