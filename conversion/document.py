from __future__ import annotations

import logging
import re
from datetime import tzinfo

from .dates import DEFAULT_LOCALE, format_date_by_locale
from .timestamp import decode_timestamp
from .unicode_escape import decode_unicode

logger = logging.getLogger(__name__)

# At least ten digits, optionally negative.
TIMESTAMP_LITERAL = re.compile(r"-?\d{9}\d+")


def convert_unicode_document(text: str) -> str:
    return decode_unicode(text)


def convert_document(
    text: str, locale: str | None = DEFAULT_LOCALE, tz: str | tzinfo | None = None
) -> str:
    """Decode Unicode escapes, then replace timestamp literals with long-form dates.

    Both substitutions happen once, in that order, so digits produced by the
    Unicode step are scanned as timestamps but nothing is decoded twice.
    """
    decoded = decode_unicode(text)
    replaced = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal replaced
        outcome = decode_timestamp(match.group(0))
        if not outcome.is_ok():
            return match.group(0)
        replaced += 1
        return format_date_by_locale(outcome.value.epoch_millis, locale, tz)

    converted = TIMESTAMP_LITERAL.sub(_replace, decoded)
    logger.info(
        "Converted document chars=%d timestamps=%d locale=%s",
        len(text),
        replaced,
        locale,
    )
    return converted


__all__ = [
    "TIMESTAMP_LITERAL",
    "convert_document",
    "convert_unicode_document",
]
