"""
News API schemas (request/response models) and request validation.
"""

from __future__ import annotations

import ipaddress
import re
from datetime import datetime
from urllib.parse import urlsplit
from uuid import UUID

from pydantic import BaseModel, Field

from .errors import NewsValidationError

_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<zone>[Zz]|[+-]\d{2}:\d{2})$"
)

_URL_SCHEMES = {"http", "https"}

# RFC 3986 reg-name: unreserved, pct-encoded and sub-delims. Non-ASCII letters
# are let through for internationalised hosts.
_HOST_PUNCTUATION = frozenset("-._~%!$&'()*+,;=")


class NewsRecord(BaseModel):
    id: UUID | None = None
    author: str
    title: str
    summary: str
    content: str
    source: str
    tags: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NewsRequest(BaseModel):
    """
    Body of POST /news and PUT /news/{news_id}.

    Every field is optional here so that decoding only rejects malformed JSON
    or wrong JSON types; content rules live in `to_record()`.
    """

    id: UUID | None = None
    author: str = ""
    title: str = ""
    summary: str = ""
    created_at: str = ""
    content: str = ""
    source: str = ""
    tags: list[str] = Field(default_factory=list)

    def to_record(self) -> NewsRecord:
        errors: list[str] = []

        for name in ("author", "title", "content", "summary"):
            value = getattr(self, name)
            if not value:
                errors.append(f"{name} is empty")
            elif not _is_utf8(value):
                errors.append(f"{name} is not valid UTF-8")

        created_at: datetime | None = None
        if not self.created_at:
            errors.append("created_at is empty")
        else:
            try:
                created_at = parse_rfc3339(self.created_at)
            except ValueError as exc:
                errors.append(f"created_at is not a valid RFC 3339 timestamp: {exc}")

        source = ""
        if not self.source:
            errors.append("source is empty")
        elif not _is_utf8(self.source):
            errors.append("source is not valid UTF-8")
        else:
            try:
                source = normalize_source_url(self.source)
            except ValueError as exc:
                errors.append(f"source is not a valid url: {exc}")

        if not self.tags:
            errors.append("tags cannot be empty")
        elif not all(_is_utf8(tag) for tag in self.tags):
            errors.append("tags contain a value that is not valid UTF-8")

        if errors:
            raise NewsValidationError(errors)

        return NewsRecord(
            id=self.id,
            author=self.author,
            title=self.title,
            summary=self.summary,
            content=self.content,
            source=source,
            tags=list(self.tags),
            created_at=created_at,
        )


class NewsListResponse(BaseModel):
    news: list[NewsRecord]
    limit: int
    offset: int
    count: int


def parse_rfc3339(value: str) -> datetime:
    """
    Parse `2024-04-07T05:13:27Z` / `2024-04-07T05:13:27.5+02:00` style stamps.

    A zone designator is mandatory; naive timestamps are rejected.
    """
    match = _RFC3339_RE.match(value or "")
    if match is None:
        raise ValueError(repr(value))

    # fromisoformat on older interpreters only takes 3 or 6 fraction digits.
    frac = match.group("frac")
    frac_part = f".{frac[:6].ljust(6, '0')}" if frac else ""
    zone = match.group("zone")
    if zone in ("Z", "z"):
        zone = "+00:00"

    try:
        return datetime.fromisoformat(f"{match.group('date')}T{match.group('time')}{frac_part}{zone}")
    except ValueError as exc:
        raise ValueError(f"{value!r} ({exc})") from exc


def normalize_source_url(value: str) -> str:
    try:
        parts = urlsplit(value)
        # .port raises ValueError for non-numeric or out-of-range ports.
        _ = parts.port
    except ValueError as exc:
        raise ValueError(f"{value!r} ({exc})") from exc

    if parts.scheme.lower() not in _URL_SCHEMES:
        raise ValueError(f"{value!r} (scheme must be http or https)")
    if not parts.hostname:
        raise ValueError(f"{value!r} (missing host)")
    if not _valid_host(parts.hostname):
        raise ValueError(f"{value!r} (invalid character in host)")
    return parts.geturl()


def _is_utf8(value: str) -> bool:
    # Lone surrogates (e.g. a JSON "\ud800" escape) decode fine but cannot be
    # encoded back out.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _valid_host(host: str) -> bool:
    if ":" in host:
        # urlsplit strips the brackets off IPv6 literals.
        try:
            ipaddress.IPv6Address(host.split("%", 1)[0])
        except ValueError:
            return False
        return True
    return all(ch.isalnum() or ch in _HOST_PUNCTUATION for ch in host)
