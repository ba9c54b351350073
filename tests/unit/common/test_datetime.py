"""Tests for common.datetime module."""

from datetime import datetime, timedelta, timezone

from common.datetime import parse_published, published_sort_key


class TestParsePublished:
    def test_rfc822(self) -> None:
        result = parse_published("Mon, 01 Jan 2024 12:00:00 +0000")
        assert result == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_iso_with_z(self) -> None:
        assert parse_published("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_naive_treated_as_utc(self) -> None:
        assert parse_published("2024-01-01 12:00").tzinfo == timezone.utc

    def test_ist_abbreviation(self) -> None:
        result = parse_published("Mon, 01 Jan 2024 12:00:00 IST")
        assert result.utcoffset() == timedelta(hours=5, minutes=30)

    def test_garbage_returns_none(self) -> None:
        assert parse_published("not a date") is None
        assert parse_published(None) is None


class TestPublishedSortKey:
    def test_unparseable_sorts_last_when_descending(self) -> None:
        values = ["garbage", "2024-02-01T00:00:00Z", "2023-01-01T00:00:00Z"]
        ordered = sorted(values, key=published_sort_key, reverse=True)
        assert ordered == ["2024-02-01T00:00:00Z", "2023-01-01T00:00:00Z", "garbage"]
