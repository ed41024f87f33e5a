from __future__ import annotations

from .types import (
    ClassificationResult,
    CronOccurrences,
    DecodeOutcome,
    FormatKind,
    TimestampDecoding,
    TimeUnit,
)

__all__ = [
    "ClassificationResult",
    "CronOccurrences",
    "DecodeOutcome",
    "FormatKind",
    "TimeUnit",
    "TimestampDecoding",
    "classify",
    "classify_one",
    "convert_document",
    "convert_unicode_document",
    "decode_base64",
    "decode_cron",
    "decode_timestamp",
    "decode_unicode",
]


def __getattr__(name: str):
    if name in {"classify", "classify_one"}:
        from . import classifier

        return getattr(classifier, name)
    if name in {"convert_document", "convert_unicode_document"}:
        from . import document

        return getattr(document, name)
    if name == "decode_base64":
        from .base64_payload import decode_base64

        return decode_base64
    if name == "decode_cron":
        from .cron import decode_cron

        return decode_cron
    if name == "decode_timestamp":
        from .timestamp import decode_timestamp

        return decode_timestamp
    if name == "decode_unicode":
        from .unicode_escape import decode_unicode

        return decode_unicode
    raise AttributeError(f"module 'conversion' has no attribute {name!r}")
