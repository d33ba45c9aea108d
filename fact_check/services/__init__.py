"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from fact_check.services import check_url` without having to
know which underlying module provides the symbol.
"""

from .embeddings import EmbeddingService  # noqa: F401
from .vector_store import PineconeVectorStore  # noqa: F401
from .llm import OpenAIChatProvider  # noqa: F401
from .storage import add_post, list_posts, delete_post, set_label, vector_search  # noqa: F401
from .evaluation import EvaluationService  # noqa: F401
from .url_similarity import check_url, url_similarity  # noqa: F401
from .trends import TrendConfig, rank_recent_trends, top_words  # noqa: F401
from .keywords import KeywordStore  # noqa: F401

__all__ = [
    "EmbeddingService",
    "PineconeVectorStore",
    "OpenAIChatProvider",
    "add_post",
    "list_posts",
    "delete_post",
    "set_label",
    "vector_search",
    "EvaluationService",
    "check_url",
    "url_similarity",
    "TrendConfig",
    "rank_recent_trends",
    "top_words",
    "KeywordStore",
]
