"""Vector-store payload schema and the adapter translating it to records.

This is the only module that knows which metadata keys a stored vector
carries. Two shapes exist in the index:

* **Version 2** (written by this package)::

      {"schema_version": 2, "text": ..., "title": ..., "label": "fake" |
       "genuine" | "unknown", "created_at": "<ISO-8601>", "url": ...}

  ``url`` is omitted when absent because Pinecone metadata cannot be null.
  The tri-state fake flag is kept as a string label for the same reason.

* **Version 1** (legacy dashboard points, no ``schema_version`` key)::

      {"title": ..., "content": ..., "searchableText": ..., "tag_id": ...,
       "createdAt": "<ISO-8601>", "url": ... | None, "is_fake": bool}
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..utils.datetime_utils import format_timestamp, parse_timestamp
from .content import ContentRecord, SimilarityMatch, make_title

CURRENT_SCHEMA_VERSION: int = 2

_LABEL_TO_FLAG: Dict[str, Optional[bool]] = {
    "fake": True,
    "genuine": False,
    "unknown": None,
}


def label_for(is_fake: Optional[bool]) -> str:
    """Encode the tri-state fake flag as a metadata label."""
    if is_fake is None:
        return "unknown"
    return "fake" if is_fake else "genuine"


def payload_from_record(record: ContentRecord) -> Dict[str, Any]:
    """Return the version 2 payload for *record*."""
    payload: Dict[str, Any] = {
        "schema_version": CURRENT_SCHEMA_VERSION,
        "text": record.text,
        "title": record.title or make_title(record.text),
        "label": label_for(record.is_fake),
    }
    if record.created_at is not None:
        payload["created_at"] = format_timestamp(record.created_at)
    if record.url:
        payload["url"] = record.url
    return payload


def _fields_v2(payload: Mapping[str, Any]) -> Dict[str, Any]:
    text = payload.get("text") or ""
    label = payload.get("label", "unknown")
    if label not in _LABEL_TO_FLAG:
        raise ValueError(f"Unknown content label: {label!r}")
    return {
        "text": text,
        "title": payload.get("title") or make_title(text),
        "url": payload.get("url") or None,
        "is_fake": _LABEL_TO_FLAG[label],
        "created_at": parse_timestamp(payload.get("created_at")),
    }


def _fields_v1(payload: Mapping[str, Any]) -> Dict[str, Any]:
    # `searchableText` is a lower-cased copy, only used when `content` is missing
    text = payload.get("content") or payload.get("searchableText") or ""
    is_fake = payload.get("is_fake")
    return {
        "text": text,
        "title": payload.get("title") or make_title(text),
        "url": payload.get("url") or None,
        "is_fake": is_fake if isinstance(is_fake, bool) else None,
        "created_at": parse_timestamp(payload.get("createdAt")),
    }


def _fields(payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    payload = payload or {}
    version = payload.get("schema_version", 1)
    if version == 1:
        return _fields_v1(payload)
    if version == CURRENT_SCHEMA_VERSION:
        return _fields_v2(payload)
    raise ValueError(f"Unsupported payload schema version: {version!r}")


def record_from_payload(
    record_id: str,
    payload: Optional[Mapping[str, Any]],
    embedding: Optional[Sequence[float]] = None,
) -> ContentRecord:
    """Translate a stored payload of any known version into a record."""
    return ContentRecord(
        id=str(record_id),
        embedding=list(embedding or []),
        **_fields(payload),
    )


def match_from_payload(
    record_id: str,
    score: float,
    payload: Optional[Mapping[str, Any]],
) -> SimilarityMatch:
    """Translate a search hit into a :class:`SimilarityMatch`."""
    fields = _fields(payload)
    return SimilarityMatch(
        record_id=str(record_id),
        score=float(score or 0.0),
        title=fields["title"],
        content=fields["text"],
        url=fields["url"],
        is_fake=fields["is_fake"],
        created_at=fields["created_at"],
    )


__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "label_for",
    "payload_from_record",
    "record_from_payload",
    "match_from_payload",
]
