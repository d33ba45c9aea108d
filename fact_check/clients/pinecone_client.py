"""Factory for the Pinecone client and helper for obtaining the Index."""

from __future__ import annotations

import logging

from pinecone import Pinecone as _Pinecone, ServerlessSpec

from ..config import (
    OPENAI_EMBEDDING_SIZE,
    PINECONE_API_KEY,
    PINECONE_CLOUD,
    PINECONE_INDEX_NAME,
    PINECONE_REGION,
)

logger = logging.getLogger(__name__)


def create_pinecone_client(api_key: str | None = None) -> _Pinecone:
    """Return a new :class:`pinecone.Pinecone` client."""
    key = api_key or PINECONE_API_KEY
    if not key:
        raise EnvironmentError("PINECONE_API_KEY is not set in environment variables")
    return _Pinecone(api_key=key)


def ensure_index(
    pc: _Pinecone,
    name: str = PINECONE_INDEX_NAME,
    dimension: int = OPENAI_EMBEDDING_SIZE,
) -> None:
    """Create the cosine index *name* unless it already exists."""
    if pc.has_index(name):
        return
    logger.info("Creating Pinecone index %s (dimension=%d)", name, dimension)
    pc.create_index(
        name=name,
        dimension=dimension,
        metric="cosine",
        spec=ServerlessSpec(cloud=PINECONE_CLOUD, region=PINECONE_REGION),
    )


def get_index(pc: _Pinecone, name: str = PINECONE_INDEX_NAME):
    """Return the configured Pinecone Index instance."""
    return pc.Index(name)

__all__ = ["create_pinecone_client", "ensure_index", "get_index"]
