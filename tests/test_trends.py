import unittest
from datetime import datetime, timedelta, timezone
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fact_check.models import ContentRecord
from fact_check.services.trends import TrendConfig, rank_recent_trends, top_words

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _record(record_id, text, minutes_ago, is_fake=None):
    created_at = None if minutes_ago is None else NOW - timedelta(minutes=minutes_ago)
    return ContentRecord(id=record_id, text=text, is_fake=is_fake, created_at=created_at)


def _words(trends):
    return [t.word for t in trends]


class TestRankRecentTrends(unittest.TestCase):

    def test_recent_word_outranks_older_word_with_equal_count(self):
        records = [
            _record("new", "dezinformacja szczepionki", 5),
            _record("old", "dezinformacja wybory", 50),
        ]

        trends = rank_recent_trends(records, now=NOW)
        by_word = {t.word: t for t in trends}

        self.assertEqual(by_word["dezinformacja"].occurrences, 2)
        self.assertEqual(by_word["szczepionki"].occurrences, 1)
        self.assertEqual(by_word["wybory"].occurrences, 1)
        self.assertLess(_words(trends).index("szczepionki"), _words(trends).index("wybory"))
        self.assertAlmostEqual(by_word["szczepionki"].momentum, 1 / 6)
        self.assertAlmostEqual(by_word["dezinformacja"].momentum, 2 / 51)
        self.assertEqual(by_word["dezinformacja"].first_seen, NOW - timedelta(minutes=50))
        self.assertEqual(by_word["dezinformacja"].last_seen, NOW - timedelta(minutes=5))
        self.assertEqual(sorted(by_word["dezinformacja"].record_ids), ["new", "old"])

    def test_records_outside_window_are_ignored(self):
        records = [
            _record("a", "stary temat", 61),
            _record("b", "nowy temat", 10),
        ]

        trends = rank_recent_trends(records, now=NOW, config=TrendConfig(window_minutes=60))
        by_word = {t.word: t for t in trends}

        self.assertNotIn("stary", by_word)
        self.assertEqual(by_word["temat"].occurrences, 1)
        self.assertEqual(by_word["temat"].record_ids, ["b"])

    def test_window_boundary_is_inclusive(self):
        trends = rank_recent_trends([_record("a", "granica", 60)], now=NOW)
        self.assertEqual(_words(trends), ["granica"])

    def test_future_and_undated_records_are_ignored(self):
        records = [
            _record("a", "przyszłość", -5),
            _record("b", "bezdaty", None),
        ]
        self.assertEqual(rank_recent_trends(records, now=NOW), [])

    def test_flagged_records_are_ignored(self):
        records = [
            _record("a", "sprawdzone", 1, is_fake=False),
            _record("b", "fałszywka", 1, is_fake=True),
            _record("c", "nieoznaczone", 1, is_fake=None),
        ]

        words = _words(rank_recent_trends(records, now=NOW))

        self.assertIn("sprawdzone", words)
        self.assertIn("nieoznaczone", words)
        self.assertNotIn("fałszywka", words)

    def test_word_counts_once_per_record(self):
        records = [_record("a", "Powódź! powódź, POWÓDŹ... powódź", 2)]

        trends = rank_recent_trends(records, now=NOW)

        self.assertEqual(len(trends), 1)
        self.assertEqual(trends[0].word, "powódź")
        self.assertEqual(trends[0].occurrences, 1)

    def test_stop_words_and_short_tokens_dropped(self):
        records = [_record("a", "To jest i w the bardzo ważne x", 1)]

        words = _words(rank_recent_trends(
            records, now=NOW, config=TrendConfig(extra_stop_words=["BARDZO"])
        ))

        self.assertEqual(words, ["ważne"])

    def test_min_occurrences_filters_noise(self):
        records = [
            _record("a", "alfa beta", 1),
            _record("b", "alfa", 2),
        ]

        words = _words(rank_recent_trends(records, now=NOW, config=TrendConfig(min_occurrences=2)))

        self.assertEqual(words, ["alfa"])

    def test_top_n_and_normalized_momentum(self):
        records = [_record(str(i), f"słowo{i}", i) for i in range(15)]

        trends = rank_recent_trends(records, now=NOW, config=TrendConfig(top_n=5))

        self.assertEqual(len(trends), 5)
        self.assertEqual(trends[0].word, "słowo0")
        self.assertEqual(trends[0].normalized_momentum, 100.0)
        for earlier, later in zip(trends, trends[1:]):
            self.assertGreaterEqual(earlier.momentum, later.momentum)
            self.assertLessEqual(later.normalized_momentum, 100.0)
            self.assertGreater(later.normalized_momentum, 0.0)

    def test_ties_break_on_last_seen(self):
        # both words first seen 30 minutes ago with two occurrences
        records = [
            _record("a", "alfa beta", 30),
            _record("b", "alfa", 1),
            _record("c", "beta", 20),
        ]

        words = _words(rank_recent_trends(records, now=NOW))

        self.assertEqual(words[:2], ["alfa", "beta"])

    def test_pure_function_of_inputs(self):
        records = [_record("a", "jeden dwa", 3), _record("b", "dwa trzy", 7)]

        first = rank_recent_trends(records, now=NOW)
        second = rank_recent_trends(records, now=NOW)

        self.assertEqual(first, second)

    def test_empty_input(self):
        self.assertEqual(rank_recent_trends([], now=NOW), [])


class TestTopWords(unittest.TestCase):

    def test_counts_every_occurrence(self):
        texts = ["Fake news o wyborach", "wybory wybory i sondaże", "sondaże"]

        result = top_words(texts, top_n=2)

        self.assertEqual([(w.word, w.count) for w in result], [("sondaże", 2), ("wybory", 2)])

    def test_extra_stop_words(self):
        result = top_words(["alfa alfa beta"], top_n=3, extra_stop_words=["alfa"])
        self.assertEqual([w.word for w in result], ["beta"])

    def test_empty(self):
        self.assertEqual(top_words([]), [])


if __name__ == '__main__':
    unittest.main()
