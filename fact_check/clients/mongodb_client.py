"""Factory for the MongoDB client and the keyword collection."""

from __future__ import annotations

from pymongo import MongoClient
from pymongo.collection import Collection

from ..config import KEYWORDS_COLLECTION, MONGODB_DATABASE, MONGODB_URI


def create_mongo_client(uri: str | None = None) -> MongoClient:
    """Return a new :class:`pymongo.MongoClient`."""
    uri = uri or MONGODB_URI
    if not uri:
        raise EnvironmentError("MONGODB_URI is not set in environment variables")
    return MongoClient(uri)


def get_keywords_collection(
    client: MongoClient,
    database: str = MONGODB_DATABASE,
    collection: str = KEYWORDS_COLLECTION,
) -> Collection:
    """Return the keyword collection from *client*."""
    return client[database][collection]

__all__ = ["create_mongo_client", "get_keywords_collection"]
