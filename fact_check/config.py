"""Centralised configuration for fact_check.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r - using default %s", name, raw, default)
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r - using default %s", name, raw, default)
        return default


# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
PINECONE_API_KEY: str | None = os.getenv("PINECONE_API_KEY")
MONGODB_URI: str | None = os.getenv("MONGODB_URI")

# ---------------------------------------------------------------------------
# Pinecone (content records + embeddings)
# ---------------------------------------------------------------------------
PINECONE_INDEX_NAME: str = os.getenv("PINECONE_INDEX_NAME", "news-articles")
PINECONE_NAMESPACE: str = os.getenv("PINECONE_NAMESPACE", "posts")
PINECONE_CLOUD: str = os.getenv("PINECONE_CLOUD", "aws")
PINECONE_REGION: str = os.getenv("PINECONE_REGION", "us-east-1")

# ---------------------------------------------------------------------------
# MongoDB (watch keywords)
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "fact_check")
KEYWORDS_COLLECTION: str = os.getenv("KEYWORDS_COLLECTION", "keywords")

# ---------------------------------------------------------------------------
# OpenAI models
# ---------------------------------------------------------------------------
OPENAI_EMBEDDING_MODEL: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")
OPENAI_EMBEDDING_SIZE: int = _int_env("OPENAI_EMBEDDING_SIZE", 1536)
OPENAI_CHAT_MODEL: str = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
EMBEDDING_CACHE_SIZE: int = _int_env("EMBEDDING_CACHE_SIZE", 100)

# ---------------------------------------------------------------------------
# Similarity thresholds
# All values are in [0, 1] where 1 means identical.
# ---------------------------------------------------------------------------
SIMILARITY_THRESHOLD: float = _float_env("SIMILARITY_THRESHOLD", 0.5)
EXACT_MATCH_THRESHOLD: float = _float_env("EXACT_MATCH_THRESHOLD", 0.98)
VERY_HIGH_SIMILARITY_THRESHOLD: float = _float_env("VERY_HIGH_SIMILARITY_THRESHOLD", 0.90)
# Hard cutoff used when adding posts, not by the evaluation ladder
EXACT_DUPLICATE_THRESHOLD: float = _float_env("EXACT_DUPLICATE_THRESHOLD", 0.9999)
URL_SIMILARITY_THRESHOLD: float = _float_env("URL_SIMILARITY_THRESHOLD", 0.9)
URL_UNSURE_THRESHOLD: float = _float_env("URL_UNSURE_THRESHOLD", 0.7)

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "OPENAI_API_KEY",
    "PINECONE_API_KEY",
    "MONGODB_URI",
    # pinecone
    "PINECONE_INDEX_NAME",
    "PINECONE_NAMESPACE",
    "PINECONE_CLOUD",
    "PINECONE_REGION",
    # mongodb
    "MONGODB_DATABASE",
    "KEYWORDS_COLLECTION",
    # openai
    "OPENAI_EMBEDDING_MODEL",
    "OPENAI_EMBEDDING_SIZE",
    "OPENAI_CHAT_MODEL",
    "EMBEDDING_CACHE_SIZE",
    # thresholds
    "SIMILARITY_THRESHOLD",
    "EXACT_MATCH_THRESHOLD",
    "VERY_HIGH_SIMILARITY_THRESHOLD",
    "EXACT_DUPLICATE_THRESHOLD",
    "URL_SIMILARITY_THRESHOLD",
    "URL_UNSURE_THRESHOLD",
]
