"""Core docstamp data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PermalinkData:
    """Encoded identifier plus the entropy that went into it."""

    identifier: str
    full_entropy: str
    used_entropy: str
    prefix: str | None = None

    @property
    def permalink(self) -> str:
        prefix = (self.prefix or "").strip("/")
        if prefix:
            return f"/{prefix}/{self.identifier}"
        return f"/{self.identifier}"


@dataclass(frozen=True, slots=True)
class ParsedPermalink:
    """Timestamp recovered from a permalink identifier."""

    original: str
    timestamp: str
    moment: datetime

    @property
    def year(self) -> int:
        return self.moment.year

    @property
    def month(self) -> int:
        return self.moment.month

    @property
    def day(self) -> int:
        return self.moment.day

    @property
    def hour(self) -> int:
        return self.moment.hour

    @property
    def minute(self) -> int:
        return self.moment.minute

    @property
    def second(self) -> int:
        return self.moment.second

    @property
    def millisecond(self) -> int:
        return self.moment.microsecond // 1000

    @property
    def iso(self) -> str:
        return self.moment.isoformat(timespec="milliseconds")

    @property
    def local(self) -> str:
        return f"{self.moment:%Y/%m/%d %H:%M:%S}"


@dataclass(slots=True)
class DocumentMetadata:
    """Front matter fields docstamp writes into a document."""

    path: Path
    title: str
    date: str
    permalink: str
    detail_date: str | None = None
    full_uuid: str | None = None
    used_uuid: str | None = None
