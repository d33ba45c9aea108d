"""Composition root: build every client and service exactly once."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .clients import (
    create_mongo_client,
    create_openai_client,
    create_pinecone_client,
    ensure_index,
    get_keywords_collection,
    get_pinecone_index,
)
from .config import (
    EXACT_DUPLICATE_THRESHOLD,
    URL_SIMILARITY_THRESHOLD,
    URL_UNSURE_THRESHOLD,
)
from .services.embeddings import EmbeddingService
from .services.evaluation import EvaluationService
from .services.keywords import KeywordStore
from .services.llm import OpenAIChatProvider
from .services.vector_store import PineconeVectorStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the API needs, wired together."""

    store: PineconeVectorStore
    evaluator: EvaluationService
    keywords: KeywordStore
    duplicate_threshold: float = EXACT_DUPLICATE_THRESHOLD
    url_threshold: float = URL_SIMILARITY_THRESHOLD
    url_unsure_threshold: float = URL_UNSURE_THRESHOLD


def build_services() -> Services:
    """Create the OpenAI, Pinecone and MongoDB clients and wire the services."""
    logger.info("Initializing API clients…")
    openai_client = create_openai_client()

    pc = create_pinecone_client()
    ensure_index(pc)
    store = PineconeVectorStore(get_pinecone_index(pc), EmbeddingService(openai_client))

    keywords = KeywordStore(get_keywords_collection(create_mongo_client()))
    keywords.ensure_indexes()

    evaluator = EvaluationService(store, OpenAIChatProvider(openai_client))
    logger.info("Services ready")
    return Services(store=store, evaluator=evaluator, keywords=keywords)

__all__ = ["Services", "build_services"]
