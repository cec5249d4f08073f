"""Permalink identifier encoding and decoding.

An identifier is 24 lowercase hex digits laid out as::

    hex(int("YYYYMMDDHHMMSS")) + 3 hex digits of milliseconds + entropy

The timestamp part has no length marker, so decoding tries the possible
widths from longest to shortest and keeps the first one that yields a real
calendar date.
"""

from __future__ import annotations

import logging
import string
import uuid
from datetime import datetime

from docstamp.errors import PermalinkFormatError
from docstamp.models import ParsedPermalink, PermalinkData

LOGGER = logging.getLogger(__name__)

ID_LENGTH = 24
MILLIS_LENGTH = 3
MAX_TIMESTAMP_HEX = 12
MIN_TIMESTAMP_HEX = 8
TIMESTAMP_DIGITS = 14

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def new_entropy() -> str:
    """Return 32 random hex digits."""
    return uuid.uuid4().hex


def _normalize_entropy(entropy: str) -> str:
    return entropy.replace("-", "").lower()


def encode(moment: datetime, entropy: str, *, prefix: str | None = None) -> PermalinkData:
    """Encode a point in time and an entropy string into a 24 hex digit identifier."""
    full_entropy = _normalize_entropy(entropy)
    timestamp_hex = format(int(moment.strftime("%Y%m%d%H%M%S")), "x")
    millis_hex = format(moment.microsecond // 1000, "03x")

    remaining = ID_LENGTH - len(timestamp_hex) - len(millis_hex)
    if remaining < 0:
        # Keep the fixed width and give up the low digits of the timestamp.
        LOGGER.warning(
            "Timestamp %s does not fit in a permalink, dropping %d hex digit(s)",
            timestamp_hex,
            -remaining,
        )
        timestamp_hex = timestamp_hex[:remaining]
        used_entropy = full_entropy[: ID_LENGTH - len(timestamp_hex) - len(millis_hex)]
        identifier = timestamp_hex + millis_hex + used_entropy
    else:
        used_entropy = full_entropy[:remaining]
        identifier = (timestamp_hex + millis_hex + used_entropy).ljust(ID_LENGTH, "0")[:ID_LENGTH]

    return PermalinkData(
        identifier=identifier,
        full_entropy=full_entropy,
        used_entropy=used_entropy,
        prefix=prefix,
    )


def generate_permalink(
    moment: datetime | None = None,
    *,
    prefix: str | None = None,
    entropy: str | None = None,
) -> PermalinkData:
    """Encode the current local time (or ``moment``) with fresh entropy."""
    return encode(
        moment if moment is not None else datetime.now(),
        entropy if entropy is not None else new_entropy(),
        prefix=prefix,
    )


def extract_identifier(permalink: str) -> str:
    """Strip the leading slash and any prefix segments from a permalink."""
    return permalink.strip().strip("/").rsplit("/", 1)[-1]


def _parse_timestamp(digits: str) -> datetime | None:
    try:
        return datetime(
            int(digits[0:4]),
            int(digits[4:6]),
            int(digits[6:8]),
            int(digits[8:10]),
            int(digits[10:12]),
            int(digits[12:14]),
        )
    except ValueError:
        return None


def decode(permalink: str) -> ParsedPermalink:
    """Recover the timestamp stored in a permalink.

    Accepts ``/<id>``, ``/docs/<id>`` or any alias prefixed form.
    """
    identifier = extract_identifier(permalink).lower()
    if len(identifier) != ID_LENGTH or not set(identifier) <= _HEX_DIGITS:
        raise PermalinkFormatError(
            f"Invalid permalink {permalink!r}: expected {ID_LENGTH} hexadecimal digits"
        )

    for width in range(MAX_TIMESTAMP_HEX, MIN_TIMESTAMP_HEX - 1, -1):
        digits = str(int(identifier[:width], 16))
        if len(digits) != TIMESTAMP_DIGITS:
            continue
        moment = _parse_timestamp(digits)
        if moment is None:
            continue
        millis = int(identifier[width : width + MILLIS_LENGTH], 16)
        if millis > 999:
            continue
        LOGGER.debug("Decoded %s with a %d digit timestamp", identifier, width)
        return ParsedPermalink(
            original=permalink,
            timestamp=digits,
            moment=moment.replace(microsecond=millis * 1000),
        )

    raise PermalinkFormatError(f"No valid timestamp found in permalink {permalink!r}")
