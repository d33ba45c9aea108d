"""Similarity-graded fact-check evaluation.

A submitted text is embedded once and compared against the stored posts.
The top cosine score decides what happens next:

* near-identical content is flagged straight away as a duplicate,
* very similar content is flagged as a likely paraphrase,
* content at or below the analysis threshold is passed without analysis,
* everything in between is sent to the LLM together with the closest posts.

Errors never escape :meth:`EvaluationService.evaluate` (apart from invalid
input); they turn into an unflagged, zero-confidence verdict.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol

from ..config import (
    EXACT_MATCH_THRESHOLD,
    SIMILARITY_THRESHOLD,
    VERY_HIGH_SIMILARITY_THRESHOLD,
)
from ..models.content import EvaluationVerdict, MatchType, SimilarityMatch
from ..utils.llm_parsing import extract_structured_json
from ..utils.text_cleaning import truncate
from .storage import validate_text
from .vector_store import PineconeVectorStore

# ---------------------------------------------------------------------------
# Fixed bands (the configurable ones live in config)
# ---------------------------------------------------------------------------
HIGH_SIMILARITY_THRESHOLD: float = 0.70
LOW_SIMILARITY_THRESHOLD: float = 0.10
CONTEXT_TOP_K: int = 5
CONTEXT_CONTENT_CHARS: int = 300
VERY_HIGH_CONFIDENCE_FLOOR: float = 0.85
FALLBACK_CONFIDENCE: float = 0.4
UNPARSEABLE_REASONING: str = "Unable to parse AI response. Manual review recommended."

logger = logging.getLogger(__name__)


class LLMProvider(Protocol):
    def complete(self, prompt: str) -> str: ...


def _pct(value: float, digits: int = 1) -> str:
    return f"{value * 100:.{digits}f}%"


def _reference(match: SimilarityMatch | None, default: str) -> str:
    if match is None:
        return default
    label = match.title or (match.content or "")[:50]
    return f'"{label}..."' if label else default


class EvaluationService:
    """Decide whether a text needs LLM fact-checking and produce a verdict."""

    def __init__(
        self,
        store: PineconeVectorStore,
        llm: LLMProvider,
        threshold: float = SIMILARITY_THRESHOLD,
        exact_threshold: float = EXACT_MATCH_THRESHOLD,
        very_high_threshold: float = VERY_HIGH_SIMILARITY_THRESHOLD,
        context_size: int = CONTEXT_TOP_K,
    ) -> None:
        self.store = store
        self.llm = llm
        self.threshold = threshold
        self.exact_threshold = exact_threshold
        self.very_high_threshold = very_high_threshold
        self.context_size = context_size

    # ------------------------------------------------------------------
    # Match bands
    # ------------------------------------------------------------------
    def classify(self, similarity: float) -> MatchType:
        """Map a similarity score to its band; the bands partition [0, 1]."""
        if similarity >= self.exact_threshold:
            return "exact"
        if similarity >= self.very_high_threshold:
            return "very-high"
        if similarity >= HIGH_SIMILARITY_THRESHOLD:
            return "high"
        if similarity >= self.threshold:
            return "medium"
        if similarity >= LOW_SIMILARITY_THRESHOLD:
            return "low"
        return "none"

    # ------------------------------------------------------------------
    # Verdicts that skip the LLM
    # ------------------------------------------------------------------
    def _exact_match(self, similarity: float, top: SimilarityMatch | None) -> EvaluationVerdict:
        return EvaluationVerdict(
            flagged=True,
            confidence=0.98,
            reasoning=(
                f"This content is nearly identical ({_pct(similarity)} match) to "
                f"{_reference(top, 'an existing post')} in the database. "
                "This appears to be duplicate or plagiarized content."
            ),
            match_type="exact",
            similarity_score=round(similarity, 4),
        )

    def _very_high_match(self, similarity: float, top: SimilarityMatch | None) -> EvaluationVerdict:
        return EvaluationVerdict(
            flagged=True,
            confidence=0.90,
            reasoning=(
                f"This content is extremely similar ({_pct(similarity)} match) to "
                f"{_reference(top, 'existing content')}. "
                "It may be a slight variation or paraphrase of existing content."
            ),
            match_type="very-high",
            similarity_score=round(similarity, 4),
        )

    def _below_threshold(self, similarity: float) -> EvaluationVerdict:
        match_type = self.classify(similarity)
        if match_type == "none":
            reasoning = (
                f"This content has minimal similarity ({_pct(similarity)}) to any existing posts. "
                "It appears to be original or unrelated to database content."
            )
        else:
            reasoning = (
                f"Content similarity ({_pct(similarity)}) is below the threshold of "
                f"{_pct(self.threshold)}. No significant matches found that warrant detailed analysis."
            )
        return EvaluationVerdict(
            flagged=False,
            confidence=round(0.6 + similarity * 0.2, 4),
            reasoning=reasoning,
            match_type=match_type,
            similarity_score=round(similarity, 4),
        )

    @staticmethod
    def _empty_database() -> EvaluationVerdict:
        return EvaluationVerdict(
            flagged=False,
            confidence=0.0,
            reasoning=(
                "Unable to evaluate - no reference posts found in database. "
                "This could be the first post or the database is empty."
            ),
            match_type="none",
            similarity_score=0.0,
        )

    @staticmethod
    def _failure(exc: Exception) -> EvaluationVerdict:
        return EvaluationVerdict(
            flagged=False,
            confidence=0.0,
            reasoning=f"Evaluation failed due to an error: {exc}. Manual review recommended.",
            match_type="none",
            similarity_score=0.0,
        )

    # ------------------------------------------------------------------
    # LLM analysis
    # ------------------------------------------------------------------
    @staticmethod
    def format_context(matches: List[SimilarityMatch]) -> str:
        """Render the closest posts as a numbered block for the prompt."""
        if not matches:
            return "No related posts found in the database."
        lines = []
        for i, match in enumerate(matches, start=1):
            content = truncate(match.content or "", CONTEXT_CONTENT_CHARS)
            lines.append(
                f"{i}. [{match.score * 100:.2f}% match]\n"
                f"Title: {match.title or 'Untitled'}\n"
                f"Content: {content}"
            )
        return "\n\n".join(lines)

    def build_prompt(self, text: str, similarity: float, context: str, match_type: MatchType) -> str:
        score = _pct(similarity, 2)
        if match_type == "very-high":
            guidance = (
                f"NOTE: This content shows VERY HIGH similarity ({score}). Focus on:\n"
                "- Whether this is a legitimate variation or potential plagiarism\n"
                "- If new information or perspective is added\n"
                "- Whether the high similarity indicates copy/paste behavior"
            )
        elif match_type == "high":
            guidance = (
                f"NOTE: This content shows HIGH similarity ({score}). Focus on:\n"
                "- Common themes or topics that explain the similarity\n"
                "- Whether factual claims align with or contradict related posts\n"
                "- If this adds meaningful new information"
            )
        else:
            guidance = (
                f"NOTE: This content shows MODERATE similarity ({score}). Focus on:\n"
                "- Whether related posts support or contradict claims in this content\n"
                "- Consistency of facts across similar content\n"
                "- Potential misinformation or inconsistencies"
            )

        return (
            "You are a fact-checker assistant. Analyze the following post and determine if it "
            "appears to be true, accurate, or potentially misleading based on the related posts "
            "from our database.\n\n"
            f'POST TO EVALUATE:\n"{text}"\n\n'
            "SIMILARITY ANALYSIS:\n"
            f"- Match Type: {match_type.upper()}\n"
            f"- Similarity Score: {score}\n"
            f"- Threshold: {_pct(self.threshold)}\n"
            f"{guidance}\n\n"
            f"RELATED POSTS FROM DATABASE:\n{context}\n\n"
            "EVALUATION CRITERIA:\n"
            "1. Factual accuracy compared to related content\n"
            "2. Potential for misinformation or misleading claims\n"
            "3. Originality vs. duplication/plagiarism\n"
            "4. Consistency with established information in the database\n\n"
            "Provide a JSON response with the following structure:\n"
            "{\n"
            '  "flagged": true | false,\n'
            '  "confidence": 0.0-1.0,\n'
            '  "reasoning": "detailed explanation of your assessment"\n'
            "}\n\n"
            "Guidelines for confidence scoring:\n"
            "- 0.9-1.0: Very confident (clear evidence)\n"
            "- 0.7-0.9: Confident (strong indicators)\n"
            "- 0.5-0.7: Moderate confidence (some uncertainty)\n"
            "- 0.3-0.5: Low confidence (unclear evidence)\n"
            "- 0.0-0.3: Very low confidence (insufficient information)"
        )

    def parse_response(self, response: str, similarity: float, match_type: MatchType) -> EvaluationVerdict:
        """Turn the LLM reply into a verdict, falling back conservatively."""
        try:
            parsed: Dict[str, Any] = extract_structured_json(response)
        except ValueError as exc:
            logger.warning("Could not parse LLM response: %s", exc)
            return self._fallback(response, similarity, match_type)

        flagged = parsed.get("flagged")
        confidence = parsed.get("confidence")
        reasoning = parsed.get("reasoning")
        if (
            not isinstance(flagged, bool)
            or isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not isinstance(reasoning, str)
        ):
            logger.warning("LLM response is missing required fields: %s", parsed)
            return self._fallback(response, similarity, match_type)

        calibrated = max(0.0, min(1.0, float(confidence)))
        if match_type == "very-high" and flagged:
            calibrated = max(calibrated, VERY_HIGH_CONFIDENCE_FLOOR)

        return EvaluationVerdict(
            flagged=flagged,
            confidence=round(calibrated, 4),
            reasoning=reasoning,
            match_type=match_type,
            similarity_score=round(similarity, 4),
        )

    @staticmethod
    def _fallback(response: str, similarity: float, match_type: MatchType) -> EvaluationVerdict:
        return EvaluationVerdict(
            flagged=similarity >= HIGH_SIMILARITY_THRESHOLD,
            confidence=FALLBACK_CONFIDENCE,
            reasoning=(response or "").strip() or UNPARSEABLE_REASONING,
            match_type=match_type,
            similarity_score=round(similarity, 4),
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def evaluate(self, text: Any) -> EvaluationVerdict:
        """Evaluate *text* against the stored posts.

        Raises :class:`~fact_check.errors.InvalidInputError` for empty input;
        every other failure is reported through the returned verdict.
        """
        text = validate_text(text)
        try:
            return self._evaluate(text)
        except Exception as exc:
            logger.exception("Evaluation failed")
            return self._failure(exc)

    def _evaluate(self, text: str) -> EvaluationVerdict:
        embedding = self.store.embed(text)
        nearest = self.store.search(embedding, 1)
        top = nearest[0] if nearest else None
        # cosine may dip below zero; anything unrelated counts as 0
        similarity = min(1.0, max(0.0, top.score)) if top else 0.0
        match_type = self.classify(similarity)
        logger.info("Similarity: %s, match type: %s", _pct(similarity, 2), match_type)

        if similarity >= self.exact_threshold:
            logger.info("Exact match detected - flagging as duplicate content")
            return self._exact_match(similarity, top)

        if similarity >= self.very_high_threshold:
            logger.info("Very high similarity detected - flagging for review")
            return self._very_high_match(similarity, top)

        if similarity <= self.threshold:
            logger.info("Similarity below threshold %s - skipping analysis", _pct(self.threshold))
            return self._below_threshold(similarity)

        logger.info("Similarity above threshold - performing AI analysis")
        related = self.store.search(embedding, self.context_size)
        if not related:
            logger.warning("Similarity above threshold but no related posts returned")
            return self._empty_database()

        prompt = self.build_prompt(text, similarity, self.format_context(related), match_type)
        response = self.llm.complete(prompt)
        return self.parse_response(response, similarity, match_type)

__all__ = [
    "EvaluationService",
    "LLMProvider",
    "HIGH_SIMILARITY_THRESHOLD",
    "LOW_SIMILARITY_THRESHOLD",
    "CONTEXT_TOP_K",
]
