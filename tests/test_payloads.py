import unittest
from datetime import datetime, timezone
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fact_check.models import ContentRecord
from fact_check.models.payloads import payload_from_record, record_from_payload


class TestPayloadAdapter(unittest.TestCase):

    def test_current_payload_round_trip(self):
        record = ContentRecord(
            id="p1",
            text="Treść",
            title="Treść",
            url="https://example.com/a",
            is_fake=None,
            embedding=[0.1, 0.2],
            created_at=datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc),
        )

        restored = record_from_payload("p1", payload_from_record(record), [0.1, 0.2])

        self.assertEqual(restored, record)

    def test_legacy_payload_prefers_content_over_searchable_text(self):
        record = record_from_payload("42", {
            "title": "Some Title...",
            "content": "Some Title With Case",
            "searchableText": "some title with case",
            "tag_id": "general",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "url": None,
        })

        self.assertEqual(record.text, "Some Title With Case")
        self.assertEqual(record.title, "Some Title...")
        self.assertIsNone(record.url)
        self.assertIsNone(record.is_fake)
        self.assertEqual(record.created_at, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_legacy_payload_with_only_searchable_text(self):
        record = record_from_payload(7, {"searchableText": "lower case only"})

        self.assertEqual(record.id, "7")
        self.assertEqual(record.text, "lower case only")
        self.assertEqual(record.title, "lower case only")
        self.assertIsNone(record.created_at)

    def test_unparseable_timestamp_becomes_none(self):
        record = record_from_payload("1", {"schema_version": 2, "text": "x", "created_at": "yesterday"})

        self.assertIsNone(record.created_at)

    def test_unknown_version_rejected(self):
        with self.assertRaises(ValueError):
            record_from_payload("1", {"schema_version": 99, "text": "x"})

    def test_unknown_label_rejected(self):
        with self.assertRaises(ValueError):
            record_from_payload("1", {"schema_version": 2, "text": "x", "label": "maybe"})


if __name__ == '__main__':
    unittest.main()
