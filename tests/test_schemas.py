"""Unit tests for news request validation."""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from news.errors import NewsValidationError
from news.schemas import NewsRequest, normalize_source_url, parse_rfc3339


def _violations(**fields) -> list[str]:
    with pytest.raises(NewsValidationError) as exc_info:
        NewsRequest(**fields).to_record()
    return exc_info.value.errors


class TestToRecord:
    def test_empty_body_collects_every_violation(self):
        errors = _violations()

        assert errors == [
            "author is empty",
            "title is empty",
            "content is empty",
            "summary is empty",
            "created_at is empty",
            "source is empty",
            "tags cannot be empty",
        ]

    def test_message_joins_violations_with_newlines(self):
        with pytest.raises(NewsValidationError) as exc_info:
            NewsRequest(author="a", title="t", content="c", summary="s").to_record()

        assert str(exc_info.value) == "created_at is empty\nsource is empty\ntags cannot be empty"

    @pytest.mark.parametrize(
        "missing, expected",
        [
            ("author", "author is empty"),
            ("title", "title is empty"),
            ("content", "content is empty"),
            ("summary", "summary is empty"),
            ("source", "source is empty"),
        ],
    )
    def test_single_empty_field(self, news_body, missing, expected):
        news_body[missing] = ""

        assert _violations(**news_body) == [expected]

    def test_empty_tags(self, news_body):
        news_body["tags"] = []

        assert _violations(**news_body) == ["tags cannot be empty"]

    def test_invalid_created_at(self, news_body):
        news_body["created_at"] = "invalid"

        errors = _violations(**news_body)

        assert len(errors) == 1
        assert errors[0].startswith("created_at is not a valid RFC 3339 timestamp")
        assert "'invalid'" in errors[0]

    def test_source_with_invalid_port(self, news_body):
        news_body["source"] = "https://xyz:abc"

        errors = _violations(**news_body)

        assert len(errors) == 1
        assert errors[0].startswith("source is not a valid url")

    @pytest.mark.parametrize("field", ["author", "title", "content", "summary", "source"])
    def test_lone_surrogate_in_text_field(self, news_body, field):
        news_body[field] = "bad \ud800 value"

        assert _violations(**news_body) == [f"{field} is not valid UTF-8"]

    def test_lone_surrogate_in_tag(self, news_body):
        news_body["tags"] = ["ok", "\udfff"]

        assert _violations(**news_body) == ["tags contain a value that is not valid UTF-8"]

    def test_valid_body_builds_record(self, news_body):
        news_id = uuid4()
        news_body["id"] = str(news_id)
        news_body["tags"] = ["a", "b"]

        record = NewsRequest(**news_body).to_record()

        assert record.id == news_id
        assert record.author == "test-author"
        assert record.title == "test-title"
        assert record.summary == "test-summary"
        assert record.content == "test-content"
        assert record.source == "https://test-news.com"
        assert record.tags == ["a", "b"]
        assert record.created_at == datetime(2024, 4, 7, 5, 13, 27, tzinfo=timezone.utc)
        assert record.updated_at is None


class TestParseRfc3339:
    def test_zulu(self):
        assert parse_rfc3339("2024-04-07T05:13:27Z") == datetime(2024, 4, 7, 5, 13, 27, tzinfo=timezone.utc)

    def test_offset_and_fraction(self):
        parsed = parse_rfc3339("2024-04-07T05:13:27.123456789+02:00")

        assert parsed.microsecond == 123456
        assert parsed.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            " 2024-04-07T05:13:27Z ",
            "2024-04-07",
            "2024-04-07T05:13:27",
            "2024-04-07 05:13:27Z",
            "2024-13-07T05:13:27Z",
            "yesterday",
        ],
    )
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            parse_rfc3339(value)


class TestNormalizeSourceUrl:
    def test_keeps_valid_url(self):
        assert normalize_source_url("https://www.example.com/a?b=1") == "https://www.example.com/a?b=1"

    @pytest.mark.parametrize(
        "value",
        ["http://[::1]:8080/feed", "https://n\u00e4ws.example/", "https://news-site.example.com:443"],
    )
    def test_accepts_valid_hosts(self, value):
        assert normalize_source_url(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            "https://xyz:abc",
            "ftp://example.com",
            "example.com",
            "https://",
            "https://exa mple.com",
            "https://exa<mple.com",
            "https://[::zz]/",
            " https://example.com",
        ],
    )
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            normalize_source_url(value)
