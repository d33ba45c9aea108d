"""Embedding utilities using the OpenAI API."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List

from openai import OpenAI

from ..config import EMBEDDING_CACHE_SIZE, OPENAI_EMBEDDING_MODEL, OPENAI_EMBEDDING_SIZE
from ..utils.text_cleaning import normalize_whitespace

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Generate embeddings, remembering the most recent ones.

    The cache is keyed by whitespace-collapsed, lower-cased text and holds at
    most ``cache_size`` vectors; the oldest entry is evicted first.
    """

    def __init__(
        self,
        openai_client: OpenAI,
        model: str = OPENAI_EMBEDDING_MODEL,
        dimensions: int = OPENAI_EMBEDDING_SIZE,
        cache_size: int = EMBEDDING_CACHE_SIZE,
    ) -> None:
        self._openai = openai_client
        self.model = model
        self.dimensions = dimensions
        self.cache_size = cache_size
        self._cache: Dict[str, List[float]] = {}
        # route handlers run in a threadpool and share one service
        self._lock = threading.Lock()

    @staticmethod
    def _cache_key(text: str) -> str:
        return normalize_whitespace(text).lower()

    def generate_embedding(self, text: str) -> List[float]:
        """Generate a vector embedding for *text* using the configured model."""
        key = self._cache_key(text)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Embedding cache hit for text (first 50 chars): %s…", text[:50])
            return list(cached)

        logger.info("Generating embedding for text (first 50 chars): %s…", text[:50])
        response = self._openai.embeddings.create(
            model=self.model,
            input=text,
            dimensions=self.dimensions,
        )
        embedding = list(response.data[0].embedding)
        logger.debug("Generated embedding of length %d", len(embedding))

        if self.cache_size > 0:
            with self._lock:
                while key not in self._cache and len(self._cache) >= self.cache_size:
                    # dicts keep insertion order, so the first key is the oldest
                    self._cache.pop(next(iter(self._cache)))
                self._cache[key] = embedding
        return list(embedding)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

__all__ = ["EmbeddingService"]
