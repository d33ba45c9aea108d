import unittest
from unittest.mock import MagicMock
import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fact_check.errors import InvalidInputError
from fact_check.models import SimilarityMatch
from fact_check.services.evaluation import EvaluationService


def _match(score, record_id="p1", title="Rząd podpisał nową ustawę", content=None):
    return SimilarityMatch(
        record_id=record_id,
        score=score,
        title=title,
        content=content if content is not None else title,
    )


def _make_store(matches):
    store = MagicMock()
    store.embed.return_value = [0.1] * 1536
    store.search.side_effect = lambda vector, k: list(matches[:k])
    return store


class TestEvaluationTiers(unittest.TestCase):

    def setUp(self):
        self.llm = MagicMock()
        self.llm.complete.return_value = json.dumps(
            {"flagged": True, "confidence": 0.75, "reasoning": "Contradicts stored posts."}
        )

    def _service(self, matches, **kwargs):
        store = _make_store(matches)
        return EvaluationService(store, self.llm, **kwargs), store

    def test_identical_text_is_exact_match_without_llm(self):
        service, store = self._service([_match(0.9999)])

        verdict = service.evaluate("Rząd podpisał nową ustawę")

        self.assertTrue(verdict.flagged)
        self.assertEqual(verdict.match_type, "exact")
        self.assertEqual(verdict.confidence, 0.98)
        self.assertIn("Rząd podpisał nową ustawę", verdict.reasoning)
        self.llm.complete.assert_not_called()

    def test_scores_at_or_above_exact_threshold_never_call_llm(self):
        for score in (0.98, 0.985, 1.0):
            service, _ = self._service([_match(score)])
            verdict = service.evaluate("text")
            self.assertTrue(verdict.flagged)
            self.assertEqual(verdict.match_type, "exact")
        self.llm.complete.assert_not_called()

    def test_very_high_similarity_flags_paraphrase(self):
        service, _ = self._service([_match(0.93)])

        verdict = service.evaluate("text")

        self.assertTrue(verdict.flagged)
        self.assertEqual(verdict.match_type, "very-high")
        self.assertEqual(verdict.confidence, 0.90)
        self.assertIn("paraphrase", verdict.reasoning)
        self.llm.complete.assert_not_called()

    def test_below_threshold_is_not_flagged(self):
        service, _ = self._service([_match(0.3)])

        verdict = service.evaluate("text")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.match_type, "low")
        self.assertEqual(verdict.similarity_score, 0.3)
        self.assertAlmostEqual(verdict.confidence, 0.66)
        self.llm.complete.assert_not_called()

    def test_below_threshold_confidence_is_monotone(self):
        previous = -1.0
        for score in (0.0, 0.05, 0.0999, 0.1, 0.2, 0.35, 0.49, 0.5):
            service, _ = self._service([_match(score)])
            verdict = service.evaluate("text")
            self.assertFalse(verdict.flagged)
            self.assertGreaterEqual(verdict.confidence, previous)
            previous = verdict.confidence
        self.llm.complete.assert_not_called()

    def test_very_low_similarity_is_none(self):
        service, _ = self._service([_match(0.05)])

        verdict = service.evaluate("text")

        self.assertEqual(verdict.match_type, "none")
        self.assertFalse(verdict.flagged)

    def test_ladder_log_messages(self):
        service, _ = self._service([_match(0.3)])

        with self.assertLogs("fact_check.services.evaluation", level="INFO") as logs:
            service.evaluate("text")

        self.assertIn("Similarity below threshold 50.0% - skipping analysis", logs.output[-1])

    def test_empty_store_scores_zero(self):
        service, _ = self._service([])

        verdict = service.evaluate("text")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.similarity_score, 0.0)
        self.assertEqual(verdict.match_type, "none")
        self.llm.complete.assert_not_called()

    def test_negative_cosine_is_clamped_to_zero(self):
        service, _ = self._service([_match(-0.2)])

        verdict = service.evaluate("text")

        self.assertEqual(verdict.similarity_score, 0.0)
        self.assertFalse(verdict.flagged)

    def test_custom_threshold_moves_analysis_band(self):
        service, _ = self._service([_match(0.4)], threshold=0.3)

        verdict = service.evaluate("text")

        self.assertEqual(verdict.match_type, "medium")
        self.llm.complete.assert_called_once()


class TestEvaluationAnalysis(unittest.TestCase):

    def setUp(self):
        self.llm = MagicMock()
        self.matches = [
            _match(0.8, "p1", "First", "A" * 400),
            _match(0.7, "p2", None, "Second content"),
            _match(0.6, "p3", "Third", "Third content"),
        ]
        self.store = _make_store(self.matches)
        self.service = EvaluationService(self.store, self.llm)

    def test_mid_band_calls_llm_and_uses_its_verdict(self):
        self.llm.complete.return_value = (
            'Here is my answer:\n```json\n{"flagged": false, "confidence": 0.8, '
            '"reasoning": "Consistent with stored posts."}\n```'
        )

        verdict = self.service.evaluate("Some claim")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.confidence, 0.8)
        self.assertEqual(verdict.reasoning, "Consistent with stored posts.")
        self.assertEqual(verdict.match_type, "high")
        self.assertEqual(verdict.similarity_score, 0.8)
        self.llm.complete.assert_called_once()

    def test_embedding_is_computed_once_and_reused(self):
        self.llm.complete.return_value = '{"flagged": true, "confidence": 0.6, "reasoning": "r"}'

        self.service.evaluate("Some claim")

        self.store.embed.assert_called_once_with("Some claim")
        self.assertEqual(self.store.search.call_count, 2)
        vectors = [c.args[0] for c in self.store.search.call_args_list]
        self.assertIs(vectors[0], vectors[1])
        self.assertEqual(self.store.search.call_args_list[1].args[1], 5)

    def test_prompt_contains_text_score_threshold_and_context(self):
        self.llm.complete.return_value = '{"flagged": true, "confidence": 0.6, "reasoning": "r"}'

        self.service.evaluate("Some claim")

        prompt = self.llm.complete.call_args.args[0]
        self.assertIn('"Some claim"', prompt)
        self.assertIn("Similarity Score: 80.00%", prompt)
        self.assertIn("Threshold: 50.0%", prompt)
        self.assertIn("1. [80.00% match]\nTitle: First\nContent: " + "A" * 300 + "...", prompt)
        self.assertIn("2. [70.00% match]\nTitle: Untitled\nContent: Second content", prompt)
        self.assertNotIn("A" * 301, prompt)

    def test_confidence_is_clamped(self):
        self.llm.complete.return_value = '{"flagged": true, "confidence": 1.7, "reasoning": "r"}'

        verdict = self.service.evaluate("Some claim")

        self.assertEqual(verdict.confidence, 1.0)

    def test_unparseable_response_falls_back_on_similarity(self):
        self.llm.complete.return_value = "I think this is probably misleading."

        verdict = self.service.evaluate("Some claim")

        self.assertTrue(verdict.flagged)  # 0.8 >= 0.70
        self.assertEqual(verdict.confidence, 0.4)
        self.assertEqual(verdict.reasoning, "I think this is probably misleading.")

    def test_missing_fields_fall_back(self):
        store = _make_store([_match(0.6)])
        service = EvaluationService(store, self.llm)
        self.llm.complete.return_value = '{"flagged": "yes", "confidence": 0.9}'

        verdict = service.evaluate("Some claim")

        self.assertFalse(verdict.flagged)  # 0.6 < 0.70
        self.assertEqual(verdict.confidence, 0.4)
        self.assertEqual(verdict.match_type, "medium")

    def test_empty_response_uses_fixed_reasoning(self):
        self.llm.complete.return_value = ""

        verdict = self.service.evaluate("Some claim")

        self.assertEqual(verdict.reasoning, "Unable to parse AI response. Manual review recommended.")

    def test_very_high_flag_confidence_floor(self):
        verdict = self.service.parse_response(
            '{"flagged": true, "confidence": 0.3, "reasoning": "copy"}', 0.92, "very-high"
        )
        self.assertEqual(verdict.confidence, 0.85)

        verdict = self.service.parse_response(
            '{"flagged": false, "confidence": 0.3, "reasoning": "ok"}', 0.92, "very-high"
        )
        self.assertEqual(verdict.confidence, 0.3)

    def test_no_context_returned_gives_empty_database_verdict(self):
        store = MagicMock()
        store.embed.return_value = [0.1]
        store.search.side_effect = [[_match(0.75)], []]
        service = EvaluationService(store, self.llm)

        verdict = service.evaluate("Some claim")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.confidence, 0.0)
        self.llm.complete.assert_not_called()


class TestEvaluationFailures(unittest.TestCase):

    def test_invalid_input_rejected_before_store_call(self):
        store = MagicMock()
        llm = MagicMock()
        service = EvaluationService(store, llm)

        for bad in (None, "", "   ", 42):
            with self.assertRaises(InvalidInputError):
                service.evaluate(bad)
        store.embed.assert_not_called()
        store.search.assert_not_called()

    def test_embedding_failure_returns_safe_default(self):
        store = MagicMock()
        store.embed.side_effect = RuntimeError("OpenAI unavailable")
        service = EvaluationService(store, MagicMock())

        verdict = service.evaluate("text")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.confidence, 0.0)
        self.assertIn("OpenAI unavailable", verdict.reasoning)

    def test_llm_failure_returns_safe_default(self):
        store = _make_store([_match(0.75)])
        llm = MagicMock()
        llm.complete.side_effect = RuntimeError("timeout")
        service = EvaluationService(store, llm)

        verdict = service.evaluate("text")

        self.assertFalse(verdict.flagged)
        self.assertEqual(verdict.confidence, 0.0)
        llm.complete.assert_called_once()


class TestClassify(unittest.TestCase):

    def test_bands_partition_unit_interval(self):
        service = EvaluationService(MagicMock(), MagicMock())
        expected = [
            (0.0, "none"), (0.0999, "none"), (0.10, "low"), (0.4999, "low"),
            (0.5, "medium"), (0.6999, "medium"), (0.70, "high"), (0.8999, "high"),
            (0.90, "very-high"), (0.9799, "very-high"), (0.98, "exact"), (1.0, "exact"),
        ]
        for score, band in expected:
            self.assertEqual(service.classify(score), band, score)


if __name__ == '__main__':
    unittest.main()
