"""Persistence of posts: add, list, label, delete and raw vector search."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, List, Optional

from ..config import EXACT_DUPLICATE_THRESHOLD
from ..errors import DuplicateContentError, InvalidInputError, RecordNotFoundError
from ..models.content import ContentRecord, SimilarityMatch
from ..models.payloads import payload_from_record
from .vector_store import PineconeVectorStore

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def validate_text(value: Any, field: str = "text") -> str:
    """Return *value* stripped, or raise :class:`InvalidInputError`."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field.capitalize()} is required and must be a non-empty string")
    return value.strip()


def add_post(
    store: PineconeVectorStore,
    text: str,
    url: Optional[str] = None,
    is_fake: Optional[bool] = None,
    duplicate_threshold: float = EXACT_DUPLICATE_THRESHOLD,
) -> ContentRecord:
    """Embed *text* once and store it unless it duplicates an existing post."""
    text = validate_text(text)
    if url is not None and not isinstance(url, str):
        raise InvalidInputError("URL must be a string")

    embedding = store.embed(text)
    nearest = store.search(embedding, 1)
    if nearest and nearest[0].score >= duplicate_threshold:
        logger.info(
            "Rejecting duplicate of %s - similarity %.4f", nearest[0].record_id, nearest[0].score
        )
        raise DuplicateContentError(nearest[0].record_id, nearest[0].score)

    record = ContentRecord.create(text, embedding, url=(url or "").strip() or None, is_fake=is_fake)
    store.upsert(record.id, record.embedding, payload_from_record(record))
    logger.info("Stored post %s (%s)", record.id, record.title)
    return record


def list_posts(store: PineconeVectorStore, limit: Optional[int] = None) -> List[ContentRecord]:
    """Return stored posts, newest first."""
    posts = list(store.scroll(limit, with_vectors=False))
    posts.sort(key=lambda p: p.created_at or _EPOCH, reverse=True)
    logger.info("Found %d posts in the vector store", len(posts))
    return posts


def get_post(store: PineconeVectorStore, record_id: str) -> ContentRecord:
    record = store.fetch(record_id)
    if record is None:
        raise RecordNotFoundError(f"Post not found: {record_id}")
    return record


def delete_post(store: PineconeVectorStore, record_id: str) -> None:
    record_id = validate_text(record_id, "post ID")
    get_post(store, record_id)
    store.delete(record_id)
    logger.info("Deleted post %s", record_id)


def set_label(store: PineconeVectorStore, record_id: str, is_fake: Optional[bool]) -> ContentRecord:
    """Change the operator's fake/genuine label, the only mutable field.

    The record is rewritten with its original embedding and timestamp, which
    also migrates legacy payloads to the current schema.
    """
    record = get_post(store, validate_text(record_id, "post ID"))
    updated = replace(record, is_fake=is_fake)
    store.upsert(updated.id, updated.embedding, payload_from_record(updated))
    logger.info("Labelled post %s as is_fake=%s", updated.id, is_fake)
    return updated


def vector_search(store: PineconeVectorStore, text: str, limit: int = 10) -> List[SimilarityMatch]:
    """Return the posts most similar to *text*."""
    text = validate_text(text)
    return store.search(store.embed(text), limit)

__all__ = [
    "validate_text",
    "add_post",
    "list_posts",
    "get_post",
    "delete_post",
    "set_label",
    "vector_search",
]
