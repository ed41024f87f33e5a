from __future__ import annotations

import logging
import math
import re

from .types import DecodeOutcome, TimestampDecoding, TimeUnit

logger = logging.getLogger(__name__)

# Magnitude boundaries used to guess the unit of an epoch value.
NANOSECOND_THRESHOLD = 10**16
MICROSECOND_THRESHOLD = 10**14
MILLISECOND_THRESHOLD = 10**11
MILLISECOND_NEGATIVE_THRESHOLD = -3 * 10**10
AMBIGUOUS_SECONDS_NEGATIVE = -(10**10)

# 1752-09-14T00:00:00Z, the Gregorian calendar adoption in Britain.
GREGORIAN_CUTOVER_MILLIS = -6857222400000

_NOISE = re.compile(r"[`'\"\s,]+")
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def clean_timestamp(raw: str | None) -> str:
    """Drop quoting, whitespace and separators plus a trailing ``L`` suffix."""
    if not raw:
        return ""
    cleaned = _NOISE.sub("", raw)
    if cleaned.endswith("L"):
        cleaned = cleaned[:-1]
    return cleaned


def parse_hex(text: str) -> int | None:
    """Return the value of ``text`` read as hex, only if it round-trips exactly."""
    try:
        value = int(text, 16)
    except ValueError:
        return None
    if format(value, "x") != text.lower():
        return None
    return value


def parse_decimal(text: str) -> int | float | None:
    if _DECIMAL_INT.fullmatch(text):
        return int(text)
    if _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
        if math.isfinite(value):
            return value
    return None


def infer_unit(value: int | float) -> tuple[TimeUnit, int | float, bool]:
    """Guess the unit of ``value`` and scale it to milliseconds.

    Returns ``(unit, millis, ambiguous)`` where ``ambiguous`` marks seconds
    values that may really be milliseconds with extra digits.
    """
    if value >= NANOSECOND_THRESHOLD or value <= -NANOSECOND_THRESHOLD:
        return TimeUnit.NANOSECONDS, _floor_div(value, 1_000_000), False
    if value >= MICROSECOND_THRESHOLD or value <= -MICROSECOND_THRESHOLD:
        return TimeUnit.MICROSECONDS, _floor_div(value, 1_000), False
    if value >= MILLISECOND_THRESHOLD or value <= MILLISECOND_NEGATIVE_THRESHOLD:
        return TimeUnit.MILLISECONDS, value, False
    ambiguous = value > MILLISECOND_THRESHOLD or value < AMBIGUOUS_SECONDS_NEGATIVE
    return TimeUnit.SECONDS, value * 1000, ambiguous


def decode_timestamp(raw: str) -> DecodeOutcome[TimestampDecoding]:
    logger.debug("Decoding timestamp candidate=%r", raw)
    cleaned = clean_timestamp(raw)
    was_full_match = cleaned == (raw or "").strip()

    value: int | float | None = parse_decimal(cleaned) if cleaned else None
    was_hex = False
    if value is None:
        value = parse_hex(cleaned)
        if value is None:
            logger.debug("Timestamp candidate rejected cleaned=%r", cleaned)
            return DecodeOutcome.failure(
                ValueError(f"Not a decimal or hexadecimal number: {cleaned!r}"),
                partial=TimestampDecoding(
                    cleaned_input=cleaned, was_full_match=was_full_match
                ),
            )
        was_hex = True

    unit, millis, ambiguous = infer_unit(value)
    decoding = TimestampDecoding(
        cleaned_input=cleaned,
        epoch_millis=_millis_text(millis),
        unit=unit,
        was_hex=was_hex,
        was_full_match=was_full_match,
        ambiguous_milliseconds_notice=ambiguous,
        pre_gregorian_notice=millis < GREGORIAN_CUTOVER_MILLIS,
    )
    logger.debug(
        "Decoded timestamp cleaned=%s unit=%s millis=%s hex=%s",
        cleaned,
        unit.value,
        decoding.epoch_millis,
        was_hex,
    )
    return DecodeOutcome.success(decoding)


def _floor_div(value: int | float, divisor: int) -> int:
    if isinstance(value, int):
        return value // divisor
    return math.floor(value / divisor)


def _millis_text(millis: int | float) -> str:
    if isinstance(millis, float):
        if millis.is_integer():
            return str(int(millis))
        return repr(millis)
    return str(millis)


__all__ = [
    "GREGORIAN_CUTOVER_MILLIS",
    "clean_timestamp",
    "decode_timestamp",
    "infer_unit",
    "parse_decimal",
    "parse_hex",
]
