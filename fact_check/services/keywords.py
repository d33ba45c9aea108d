"""Watch-list keywords kept in MongoDB."""

from __future__ import annotations

import logging
from typing import Any, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..errors import DuplicateKeywordError, RecordNotFoundError
from ..models.keyword import Keyword
from ..utils.datetime_utils import get_current_timestamp, parse_timestamp
from .storage import validate_text

logger = logging.getLogger(__name__)


class KeywordStore:
    """CRUD over the keyword collection plus a substring check."""

    def __init__(self, collection: Collection) -> None:
        self._db = collection

    def ensure_indexes(self) -> None:
        self._db.create_index("keyword", unique=True)

    def list_keywords(self) -> List[Keyword]:
        """Return all keywords, newest first."""
        docs = self._db.find({}).sort("created_at", DESCENDING)
        return [
            Keyword(
                id=str(doc["_id"]),
                keyword=doc["keyword"],
                created_at=parse_timestamp(doc.get("created_at")),
            )
            for doc in docs
        ]

    def all_keywords(self) -> List[str]:
        return [doc["keyword"] for doc in self._db.find({}, {"keyword": 1})]

    def add_keyword(self, keyword: Any) -> Keyword:
        keyword = validate_text(keyword, "keyword")
        created_at = get_current_timestamp()
        try:
            result = self._db.insert_one({"keyword": keyword, "created_at": created_at})
        except DuplicateKeyError as exc:
            raise DuplicateKeywordError(f"Keyword already exists: {keyword}") from exc
        logger.info("Stored keyword %r with _id=%s", keyword, result.inserted_id)
        return Keyword(id=str(result.inserted_id), keyword=keyword, created_at=created_at)

    def delete_keyword(self, keyword_id: str) -> None:
        try:
            oid = ObjectId(keyword_id)
        except (InvalidId, TypeError) as exc:
            raise RecordNotFoundError(f"Keyword not found: {keyword_id}") from exc
        result = self._db.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise RecordNotFoundError(f"Keyword not found: {keyword_id}")
        logger.info("Deleted keyword %s", keyword_id)

    def matches_keyword(self, text: Any) -> bool:
        """Return ``True`` if *text* contains any stored keyword (case-insensitive)."""
        normalized = validate_text(text).lower()
        return any(k.lower() in normalized for k in self.all_keywords())


__all__ = ["KeywordStore"]
