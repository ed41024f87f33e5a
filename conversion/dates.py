from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo

import pendulum

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "zh-CN"
INVALID_DATE = "Invalid Date"

# Locale tag -> (pendulum locale, long-form pattern).
_LONG_FORMATS = {
    "zh-CN": ("zh", "YYYY年M月D日dddd HH:mm:ss zz"),
    "en-US": ("en", "dddd, MMMM D, YYYY [at] HH:mm:ss zz"),
}
SUPPORTED_LOCALES = tuple(_LONG_FORMATS)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_locale(tag: str | None) -> str:
    """Map a locale tag such as ``en``, ``en_US`` or ``zh-Hans`` onto a supported one."""
    if not tag:
        return DEFAULT_LOCALE
    lowered = tag.strip().replace("_", "-").lower()
    for supported in SUPPORTED_LOCALES:
        language = supported.split("-")[0].lower()
        if lowered == supported.lower() or lowered.split("-")[0] == language:
            return supported
    return DEFAULT_LOCALE


def resolve_timezone(name: str | tzinfo | None):
    if name is None or name == "":
        return pendulum.local_timezone()
    if isinstance(name, str):
        return pendulum.timezone(name)
    return name


def millis_to_datetime(
    millis: int | float | str, tz: str | tzinfo | None = None
) -> pendulum.DateTime | None:
    """Convert epoch milliseconds to a zoned datetime, or None when out of range.

    An unknown zone name is not an out-of-range date; its error propagates.
    """
    zone = resolve_timezone(tz)
    try:
        value = _parse_millis(millis) if isinstance(millis, str) else millis
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        moment = _EPOCH + timedelta(milliseconds=value)
        return pendulum.instance(moment).in_timezone(zone)
    except (OverflowError, ValueError) as exc:
        logger.debug("Epoch millis out of range millis=%s error=%s", millis, exc)
        return None


def _parse_millis(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        return float(text)


def format_date_by_locale(
    millis: int | float | str,
    locale: str | None = DEFAULT_LOCALE,
    tz: str | tzinfo | None = None,
) -> str:
    moment = millis_to_datetime(millis, tz)
    if moment is None:
        return INVALID_DATE
    pendulum_locale, pattern = _LONG_FORMATS[normalize_locale(locale)]
    return moment.format(pattern, locale=pendulum_locale)


def format_gmt(millis: int | float | str) -> str:
    moment = millis_to_datetime(millis, "UTC")
    if moment is None:
        return INVALID_DATE
    return moment.format("ddd, DD MMM YYYY HH:mm:ss [GMT]", locale="en")


def format_local(millis: int | float | str, tz: str | tzinfo | None = None) -> str:
    moment = millis_to_datetime(millis, tz)
    if moment is None:
        return INVALID_DATE
    return moment.format("ddd MMM DD YYYY HH:mm:ss [GMT]ZZ (zz)", locale="en")


__all__ = [
    "DEFAULT_LOCALE",
    "INVALID_DATE",
    "SUPPORTED_LOCALES",
    "format_date_by_locale",
    "format_gmt",
    "format_local",
    "millis_to_datetime",
    "normalize_locale",
    "resolve_timezone",
]
