from __future__ import annotations

import logging
from datetime import date, datetime

import pendulum
from croniter import croniter

from .types import CronOccurrences, DecodeOutcome

logger = logging.getLogger(__name__)

CRON_TIMEZONE = "Asia/Shanghai"
OCCURRENCE_COUNT = 10
WEEKDAY_NAMES = ("星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六")

_FIELD_COUNTS = (5, 6)


def is_cron_expression(text: str) -> bool:
    """Return True for a valid five or six field expression (seconds first)."""
    expression = text.strip()
    if len(expression.split()) not in _FIELD_COUNTS:
        return False
    return croniter.is_valid(expression, second_at_beginning=True)


def format_occurrence(moment: datetime) -> str:
    weekday = WEEKDAY_NAMES[moment.isoweekday() % 7]
    return f"{moment:%Y-%m-%d} {weekday} {moment:%H:%M:%S}"


def decode_cron(
    expression: str, now: date | datetime | None = None
) -> DecodeOutcome[CronOccurrences]:
    """List the next fire times of ``expression`` after the start of ``now``'s day.

    The schedule is always evaluated in Asia/Shanghai; ``now`` only contributes
    its calendar date.
    """
    tz = pendulum.timezone(CRON_TIMEZONE)
    if now is None:
        now = pendulum.now(CRON_TIMEZONE)
    elif isinstance(now, datetime) and now.tzinfo is not None:
        now = now.astimezone(tz)
    basis = datetime(now.year, now.month, now.day, tzinfo=tz)

    cleaned = expression.strip()
    if len(cleaned.split()) not in _FIELD_COUNTS:
        return DecodeOutcome.failure(
            ValueError(f"Expected 5 or 6 fields in cron expression: {cleaned!r}")
        )
    try:
        schedule = croniter(cleaned, basis, second_at_beginning=True)
        occurrences = tuple(
            format_occurrence(schedule.get_next(datetime))
            for _ in range(OCCURRENCE_COUNT)
        )
    except (ValueError, KeyError) as exc:
        # CroniterError subclasses ValueError.
        logger.debug("Cron expression rejected expression=%r error=%s", cleaned, exc)
        return DecodeOutcome.failure(exc)
    logger.debug(
        "Cron expression expanded expression=%r first=%s", cleaned, occurrences[0]
    )
    return DecodeOutcome.success(
        CronOccurrences(expression=cleaned, occurrences=occurrences)
    )


__all__ = [
    "CRON_TIMEZONE",
    "OCCURRENCE_COUNT",
    "WEEKDAY_NAMES",
    "decode_cron",
    "format_occurrence",
    "is_cron_expression",
]
