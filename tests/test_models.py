from datetime import datetime, timezone

import pytest

from activitywatch.models import Bucket, Event, ResponseFormat


class TestResponseFormat:
    def test_values(self):
        assert ResponseFormat("markdown") is ResponseFormat.MARKDOWN
        assert ResponseFormat("json") is ResponseFormat.JSON

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            ResponseFormat("xml")


class TestBucket:
    def test_decodes_full_payload(self, window_bucket):
        bucket = Bucket.from_dict(window_bucket)

        assert bucket.id == "aw-watcher-window_host1"
        assert bucket.client == "aw-watcher-window"
        assert bucket.bucket_type == "currentwindow"
        assert bucket.hostname == "host1"
        assert bucket.created == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert bucket.last_updated == datetime(2024, 1, 2, 8, 30, 0, 123000, tzinfo=timezone.utc)
        assert bucket.data == {}

    def test_optional_fields_may_be_missing(self, afk_bucket):
        bucket = Bucket.from_dict(afk_bucket)

        assert bucket == Bucket(id="aw-watcher-afk_host1")

    def test_offset_timestamps_are_converted_to_utc(self):
        bucket = Bucket.from_dict({"id": "b", "created": "2024-01-01T02:00:00+02:00"})

        assert bucket.created == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert bucket.created.tzinfo == timezone.utc

    def test_missing_id_fails(self):
        with pytest.raises(ValueError, match="id"):
            Bucket.from_dict({"client": "aw-watcher-window"})

    def test_bad_timestamp_fails(self):
        with pytest.raises(ValueError, match="created"):
            Bucket.from_dict({"id": "b", "created": "yesterday"})

    def test_markdown_lists_present_fields(self, window_bucket):
        markdown = Bucket.from_dict(window_bucket).to_markdown()

        assert markdown.splitlines() == [
            "## aw-watcher-window_host1",
            "- **Client**: aw-watcher-window",
            "- **Type**: currentwindow",
            "- **Hostname**: host1",
            "- **Created**: 2024-01-01 00:00:00",
            "- **Last Updated**: 2024-01-02 08:30:00",
        ]

    def test_markdown_omits_absent_fields(self, afk_bucket):
        markdown = Bucket.from_dict(afk_bucket).to_markdown()

        assert markdown == "## aw-watcher-afk_host1"
        assert "**" not in markdown

    def test_markdown_shows_metadata_when_present(self):
        bucket = Bucket.from_dict({"id": "b", "data": {"readonly": True}})

        assert '- **Metadata**: {"readonly":true}' in bucket.to_markdown()

    def test_round_trip(self, window_bucket, afk_bucket):
        for payload in (window_bucket, afk_bucket):
            bucket = Bucket.from_dict(payload)
            assert Bucket.from_dict(bucket.to_dict()) == bucket

    def test_to_dict_uses_wire_keys(self, window_bucket):
        encoded = Bucket.from_dict(window_bucket).to_dict()

        assert encoded["type"] == "currentwindow"
        assert "bucket_type" not in encoded
        assert encoded["created"] == "2024-01-01T00:00:00+00:00"


class TestEvent:
    def test_decodes_payload(self):
        event = Event.from_dict({
            "id": 1,
            "timestamp": "2024-01-01T12:00:00Z",
            "duration": 60.5,
            "data": {"app": "Firefox", "title": "Test Page"},
        })

        assert event.id == 1
        assert event.timestamp == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        assert event.duration == 60.5
        assert event.data["app"] == "Firefox"

    def test_id_is_optional(self):
        event = Event.from_dict({"timestamp": "2024-01-01T12:00:00Z", "duration": 5, "data": {}})

        assert event.id is None
        assert isinstance(event.duration, float)

    @pytest.mark.parametrize("missing", ["timestamp", "duration", "data"])
    def test_required_fields(self, missing):
        payload = {"timestamp": "2024-01-01T12:00:00Z", "duration": 1.0, "data": {}}
        del payload[missing]

        with pytest.raises(ValueError, match=missing):
            Event.from_dict(payload)

    def test_duration_must_be_numeric(self):
        with pytest.raises(ValueError, match="duration"):
            Event.from_dict({"timestamp": "2024-01-01T12:00:00Z", "duration": "1", "data": {}})

    def test_markdown(self, window_events):
        markdown = Event.from_dict(window_events[1]).to_markdown()

        assert markdown.splitlines() == [
            "### 2024-01-01 12:00:00 (60.5s)",
            "- **app**: Code",
            "- **title**: main.py",
            "- **pinned**: false",
        ]

    def test_markdown_renders_nested_values_as_json(self):
        event = Event.from_dict({
            "timestamp": "2024-01-01T12:00:00Z",
            "duration": 0.04,
            "data": {"tabs": ["a", "b"], "meta": {"n": 1}, "url": None, "title": "café"},
        })

        lines = event.to_markdown().splitlines()
        assert lines[0] == "### 2024-01-01 12:00:00 (0.0s)"
        assert '- **tabs**: ["a","b"]' in lines
        assert '- **meta**: {"n":1}' in lines
        assert "- **url**: null" in lines
        assert "- **title**: café" in lines

    def test_round_trip(self, window_events):
        for payload in window_events:
            event = Event.from_dict(payload)
            assert Event.from_dict(event.to_dict()) == event
