"""Pinecone-backed store of content records and their embeddings."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from pinecone import Index  # type: ignore

from ..config import PINECONE_NAMESPACE
from ..models.content import ContentRecord, Embedding, SimilarityMatch
from ..models.payloads import match_from_payload, record_from_payload
from .embeddings import EmbeddingService

logger = logging.getLogger(__name__)

# Pinecone caps `fetch` requests at a few hundred ids
SCROLL_PAGE_SIZE: int = 100


class PineconeVectorStore:
    """Embed, store, search and iterate content records in one namespace."""

    def __init__(
        self,
        pinecone_index: Index,
        embedder: EmbeddingService,
        namespace: str = PINECONE_NAMESPACE,
    ) -> None:
        self._index = pinecone_index
        self._embedder = embedder
        self.namespace = namespace

    def embed(self, text: str) -> Embedding:
        return self._embedder.generate_embedding(text)

    def upsert(self, record_id: str, vector: Embedding, payload: Dict[str, Any]) -> None:
        logger.info("Upserting record %s to Pinecone namespace %s", record_id, self.namespace)
        self._index.upsert(
            namespace=self.namespace,
            vectors=[{"id": record_id, "values": list(vector), "metadata": payload}],
        )

    def search(self, vector: Embedding, k: int = 10) -> List[SimilarityMatch]:
        """Return the *k* nearest records ordered by descending cosine score.

        Matches whose metadata cannot be read are logged and skipped.
        """
        if k <= 0:
            return []
        query_response = self._index.query(
            namespace=self.namespace,
            vector=list(vector),
            top_k=k,
            include_metadata=True,
            include_values=False,
        )
        matches: List[SimilarityMatch] = []
        for match in query_response.matches:
            try:
                matches.append(match_from_payload(match.id, match.score, match.metadata))
            except ValueError as exc:
                logger.warning("Skipping unreadable record %s: %s", match.id, exc)
        matches.sort(key=lambda m: m.score, reverse=True)
        logger.debug("Vector search returned %d matches", len(matches))
        return matches

    def scroll(self, limit: Optional[int] = None, with_vectors: bool = True) -> Iterator[ContentRecord]:
        """Yield every stored record (at most *limit* of them).

        Records whose metadata cannot be read are logged and skipped. Pinecone's
        ``fetch`` always returns vector values; with ``with_vectors=False`` they
        are dropped right away so metadata-only scans do not hold them.
        """
        yielded = 0
        for id_page in self._index.list(namespace=self.namespace, limit=SCROLL_PAGE_SIZE):
            ids = list(id_page)
            if not ids:
                continue
            fetched = self._index.fetch(ids=ids, namespace=self.namespace)
            for record_id in ids:
                vector = fetched.vectors.get(record_id)
                if vector is None:
                    continue
                values = vector.values if with_vectors else None
                try:
                    record = record_from_payload(record_id, vector.metadata, values)
                except ValueError as exc:
                    logger.warning("Skipping unreadable record %s: %s", record_id, exc)
                    continue
                yield record
                yielded += 1
                if limit is not None and yielded >= limit:
                    return

    def fetch(self, record_id: str) -> Optional[ContentRecord]:
        fetched = self._index.fetch(ids=[record_id], namespace=self.namespace)
        vector = fetched.vectors.get(record_id)
        if vector is None:
            return None
        return record_from_payload(record_id, vector.metadata, vector.values)

    def delete(self, record_id: str) -> None:
        logger.info("Deleting record %s from Pinecone namespace %s", record_id, self.namespace)
        self._index.delete(ids=[record_id], namespace=self.namespace)

__all__ = ["PineconeVectorStore", "SCROLL_PAGE_SIZE"]
