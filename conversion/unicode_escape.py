from __future__ import annotations

import json
import logging
import re

from .types import DecodeOutcome

logger = logging.getLogger(__name__)

# Alternatives are tried in order at each position; the longest forms come first.
UNICODE_ESCAPE = re.compile(
    r"\\U(?P<long>[0-9a-fA-F]{8})"
    r"|\\?U\+(?P<wide>[0-9a-fA-F]{5})"
    r"|\\?U\+(?P<plus>[0-9a-fA-F]{4})"
    r"|\\u(?P<unit>[0-9a-fA-F]{4})"
)

_MAX_CODE_POINT = 0x10FFFF
_SURROGATE = re.compile("[\ud800-\udfff]")


def contains_unicode_escape(text: str) -> bool:
    return UNICODE_ESCAPE.search(text) is not None


def decode_unicode(raw: str) -> str:
    """Replace every recognised escape in ``raw`` with the character it names.

    ``\\uXXXX`` escapes are UTF-16 code units, so an escaped surrogate pair
    becomes a single character. A surrogate left without its partner becomes
    U+FFFD so the result always encodes as UTF-8. Text without escapes comes
    back unchanged.
    """

    def _replace(match: re.Match[str]) -> str:
        digits = next(group for group in match.groups() if group is not None)
        code_point = int(digits, 16)
        if code_point > _MAX_CODE_POINT:
            return match.group(0)
        return chr(code_point)

    decoded = UNICODE_ESCAPE.sub(_replace, raw)
    if _SURROGATE.search(decoded):
        decoded = decoded.encode("utf-16-le", "surrogatepass").decode(
            "utf-16-le", "replace"
        )
    return decoded


def extract_json_fragment(text: str) -> DecodeOutcome[str] | None:
    """Pretty-print the ``{...}`` span of ``text``, or ``None`` if there is none."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    fragment = text[start : end + 1]
    try:
        parsed = json.loads(fragment)
    except json.JSONDecodeError as exc:
        logger.debug("Embedded JSON fragment failed to parse: %s", exc)
        return DecodeOutcome.failure(exc, partial=fragment)
    return DecodeOutcome.success(json.dumps(parsed, indent=2, ensure_ascii=False))


__all__ = [
    "UNICODE_ESCAPE",
    "contains_unicode_escape",
    "decode_unicode",
    "extract_json_fragment",
]
