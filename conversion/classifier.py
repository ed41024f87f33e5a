from __future__ import annotations

import logging
import re
from typing import Callable, Sequence

from .base64_payload import is_base64_code
from .cron import is_cron_expression
from .types import ClassificationResult, FormatKind
from .unicode_escape import contains_unicode_escape

logger = logging.getLogger(__name__)

INTEGER_TOKEN = re.compile(r"-?[0-9]+")
_LEADING_LABEL = re.compile(r"^[^,]*,")


def looks_like_integer(text: str) -> bool:
    return INTEGER_TOKEN.fullmatch(text) is not None


def looks_like_base64(text: str) -> bool:
    return is_base64_code(_LEADING_LABEL.sub("", text, count=1))


# Evaluated top to bottom; the first predicate that accepts decides the kind.
FORMAT_RULES: tuple[tuple[Callable[[str], bool], FormatKind], ...] = (
    (looks_like_integer, FormatKind.TIME),
    (contains_unicode_escape, FormatKind.UNICODE),
    (is_cron_expression, FormatKind.CRONTAB),
    (looks_like_base64, FormatKind.BASE64),
)


def classify_one(text: str) -> FormatKind:
    if not text:
        return FormatKind.NONE
    for predicate, kind in FORMAT_RULES:
        if predicate(text):
            return kind
    return FormatKind.NONE


def classify(candidates: Sequence[str]) -> ClassificationResult:
    for index, candidate in enumerate(candidates):
        kind = classify_one(candidate)
        if kind is not FormatKind.NONE:
            logger.debug("Classified candidate index=%d kind=%s", index, kind.value)
            return ClassificationResult(format_kind=kind, candidate_index=index)
    return ClassificationResult(format_kind=FormatKind.NONE, candidate_index=0)


__all__ = [
    "FORMAT_RULES",
    "classify",
    "classify_one",
    "looks_like_base64",
    "looks_like_integer",
]
