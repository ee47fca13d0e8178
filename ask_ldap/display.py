"""Attribute value decoding for display."""

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Union

from .constants import (
    BINARY_ATTRIBUTES,
    BINARY_PREVIEW_BYTES,
    GENERALIZED_TIME_ATTRIBUTES,
    WINDOWS_TIMESTAMP_ATTRIBUTES,
    WINDOWS_TO_UNIX_EPOCH,
)

RawValue = Union[bytes, str]

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Directory "generalized time" as stored by AD, e.g. 20240101000000.0Z
GENERALIZED_TIME_FORMAT = "%Y%m%d%H%M%S.%fZ"
GENERALIZED_TIME_RE = re.compile(r"[0-9]{14}\.[0-9]Z")

# Signed decimal ASCII integer, nothing else
FILETIME_RE = re.compile(r"[+-]?[0-9]+")


class DecoderKind(Enum):
    """How a raw attribute value is turned into display text."""
    BINARY = "binary"
    WINDOWS_TIMESTAMP = "windows_timestamp"
    GENERALIZED_TIME = "generalized_time"
    PLAIN_STRING = "plain_string"


def decoder_kind(attribute_name: str) -> DecoderKind:
    """Select the decoder for an attribute (exact, case-sensitive match)."""
    if attribute_name in BINARY_ATTRIBUTES:
        return DecoderKind.BINARY
    if attribute_name in WINDOWS_TIMESTAMP_ATTRIBUTES:
        return DecoderKind.WINDOWS_TIMESTAMP
    if attribute_name in GENERALIZED_TIME_ATTRIBUTES:
        return DecoderKind.GENERALIZED_TIME
    return DecoderKind.PLAIN_STRING


def _as_bytes(value: RawValue) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def _as_text(value: RawValue) -> str:
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def format_instant(moment: datetime) -> str:
    """
    Render an aware datetime as 'YYYY-MM-DD HH:MM:SS[.ffffff] +0000 UTC'.

    Fractional seconds are only shown when non-zero, with trailing zeros trimmed.
    """
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip("0")
    return f"{text} +0000 UTC"


def display_binary(value: RawValue) -> str:
    """Length of the full value plus a hex preview of its first bytes."""
    data = _as_bytes(value)
    return f"<binary {len(data)} bytes> '{data[:BINARY_PREVIEW_BYTES].hex()}'"


def display_windows_timestamp(value: RawValue) -> str:
    """
    Decode a Windows FILETIME (100ns intervals since 1601-01-01 UTC).

    0 means "never set" and renders as 'n/a'. Values that are not integers or
    fall outside the representable date range render as an ERROR string.
    """
    text = _as_text(value)
    if not FILETIME_RE.fullmatch(text):
        return f"ERROR: 'invalid decimal integer: {text!r}'"
    intervals = int(text, 10)

    if intervals == 0:
        return "n/a"

    try:
        moment = UNIX_EPOCH + timedelta(microseconds=(intervals - WINDOWS_TO_UNIX_EPOCH) // 10)
    except OverflowError as e:
        return f"ERROR: '{e}'"
    return format_instant(moment)


def display_generalized_time(value: RawValue) -> str:
    """Decode generalized time as UTC; unparseable values are shown as-is."""
    text = _as_text(value)
    if not GENERALIZED_TIME_RE.fullmatch(text):
        return text
    try:
        moment = datetime.strptime(text, GENERALIZED_TIME_FORMAT)
    except ValueError:
        return text
    return format_instant(moment.replace(tzinfo=timezone.utc))


def display_string(value: RawValue) -> str:
    return f"'{_as_text(value)}'"


_DECODERS = {
    DecoderKind.BINARY: display_binary,
    DecoderKind.WINDOWS_TIMESTAMP: display_windows_timestamp,
    DecoderKind.GENERALIZED_TIME: display_generalized_time,
    DecoderKind.PLAIN_STRING: display_string,
}


def decode(attribute_name: str, raw_value: RawValue) -> str:
    """Render one raw attribute value for display, based on the attribute name."""
    return _DECODERS[decoder_kind(attribute_name)](raw_value)
