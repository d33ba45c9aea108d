"""Convenience re-exports for SDK client factories."""

from .openai_client import create_openai_client  # noqa: F401
from .pinecone_client import create_pinecone_client, ensure_index  # noqa: F401
from .pinecone_client import get_index as get_pinecone_index  # noqa: F401
from .mongodb_client import create_mongo_client, get_keywords_collection  # noqa: F401

__all__ = [
    "create_openai_client",
    "create_pinecone_client",
    "ensure_index",
    "get_pinecone_index",
    "create_mongo_client",
    "get_keywords_collection",
]
