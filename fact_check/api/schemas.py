"""Request and response bodies of the HTTP API.

Field names are snake_case in Python and camelCase on the wire, matching
what the dashboard frontend reads.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.content import ContentRecord, EvaluationVerdict, MatchType, SimilarityMatch, UrlStatus
from ..models.keyword import Keyword
from ..models.trend import RankedWord, WordCount


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class TextRequest(CamelModel):
    text: Optional[str] = None


class AddPostRequest(CamelModel):
    text: Optional[str] = None
    url: Optional[str] = None
    is_fake: Optional[bool] = None


class LabelRequest(CamelModel):
    is_fake: Optional[bool] = None


class UrlCheckRequest(CamelModel):
    url: Optional[str] = None


class VectorSearchRequest(CamelModel):
    text: Optional[str] = None
    limit: int = Field(default=10, ge=1, le=100)


class KeywordRequest(CamelModel):
    keyword: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


class HealthResponse(CamelModel):
    status: str
    version: str


class PostOut(CamelModel):
    id: str
    text: str
    title: str
    url: Optional[str] = None
    is_fake: Optional[bool] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: ContentRecord) -> "PostOut":
        return cls(
            id=record.id,
            text=record.text,
            title=record.title,
            url=record.url,
            is_fake=record.is_fake,
            created_at=record.created_at,
        )


class PostListResponse(CamelModel):
    success: bool = True
    count: int
    posts: List[PostOut]


class PostCreatedResponse(CamelModel):
    success: bool = True
    message: str
    post: PostOut


class EvaluationResponse(CamelModel):
    flagged: bool
    confidence: float
    reasoning: str
    similarity_score: float
    match_type: MatchType

    @classmethod
    def from_verdict(cls, verdict: EvaluationVerdict) -> "EvaluationResponse":
        return cls(
            flagged=verdict.flagged,
            confidence=verdict.confidence,
            reasoning=verdict.reasoning,
            similarity_score=verdict.similarity_score,
            match_type=verdict.match_type,
        )


class UrlCheckResponse(CamelModel):
    similarity: float
    similarity_percentage: str
    matched_url: Optional[str] = None
    status: UrlStatus
    warning: bool
    message: str


class SearchResultOut(CamelModel):
    id: str
    score: float
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    is_fake: Optional[bool] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_match(cls, match: SimilarityMatch) -> "SearchResultOut":
        return cls(
            id=match.record_id,
            score=round(match.score, 4),
            title=match.title,
            content=match.content,
            url=match.url,
            is_fake=match.is_fake,
            created_at=match.created_at,
        )


class VectorSearchResponse(CamelModel):
    success: bool = True
    query: str
    results: List[SearchResultOut]
    count: int


class TrendOut(CamelModel):
    word: str
    occurrences: int
    record_ids: List[str]
    first_seen: datetime
    last_seen: datetime
    age_minutes: float
    momentum: float
    normalized_momentum: float
    rate_per_minute: float

    @classmethod
    def from_ranked(cls, item: RankedWord) -> "TrendOut":
        return cls(
            word=item.word,
            occurrences=item.occurrences,
            record_ids=item.record_ids,
            first_seen=item.first_seen,
            last_seen=item.last_seen,
            age_minutes=round(item.age_minutes, 2),
            momentum=round(item.momentum, 4),
            normalized_momentum=round(item.normalized_momentum, 2),
            rate_per_minute=round(item.rate_per_minute, 4),
        )


class TrendsResponse(CamelModel):
    window_minutes: float
    trends: List[TrendOut]


class WordCountOut(CamelModel):
    word: str
    count: int

    @classmethod
    def from_count(cls, item: WordCount) -> "WordCountOut":
        return cls(word=item.word, count=item.count)


class TopWordsResponse(CamelModel):
    words: List[WordCountOut]


class KeywordOut(CamelModel):
    id: str
    keyword: str

    @classmethod
    def from_keyword(cls, keyword: Keyword) -> "KeywordOut":
        return cls(id=keyword.id, keyword=keyword.keyword)


class KeywordListResponse(CamelModel):
    keywords: List[KeywordOut]


class KeywordMatchResponse(CamelModel):
    matched: bool
