from datetime import date, datetime, timezone

import pytest

from conversion.cron import (
    OCCURRENCE_COUNT,
    decode_cron,
    format_occurrence,
    is_cron_expression,
)


def test_daily_schedule_lists_ten_days_after_basis():
    outcome = decode_cron("0 0 * * *", now=date(2024, 1, 1))

    assert outcome.is_ok()
    occurrences = outcome.value.occurrences
    assert len(occurrences) == OCCURRENCE_COUNT
    assert occurrences[0] == "2024-01-02 星期二 00:00:00"
    assert occurrences[-1] == "2024-01-11 星期四 00:00:00"


def test_six_field_expression_has_seconds_first():
    outcome = decode_cron("30 0 12 * * *", now=date(2024, 1, 1))

    assert outcome.is_ok()
    assert outcome.value.occurrences[0] == "2024-01-01 星期一 12:00:30"
    assert outcome.value.occurrences[1] == "2024-01-02 星期二 12:00:30"


def test_basis_is_start_of_day_so_earlier_times_today_are_skipped():
    outcome = decode_cron("0 */6 * * *", now=datetime(2024, 3, 5, 23, 59))

    assert outcome.value.occurrences[:2] == (
        "2024-03-05 星期二 06:00:00",
        "2024-03-05 星期二 12:00:00",
    )


def test_aware_now_is_read_in_shanghai():
    # 20:00 UTC on Jan 1 is already Jan 2 in Shanghai.
    outcome = decode_cron("0 0 * * *", now=datetime(2024, 1, 1, 20, tzinfo=timezone.utc))

    assert outcome.value.occurrences[0] == "2024-01-03 星期三 00:00:00"


def test_expression_is_stored_trimmed():
    outcome = decode_cron("  0 0 * * *  ", now=date(2024, 1, 1))

    assert outcome.value.expression == "0 0 * * *"


@pytest.mark.parametrize("expression", ["61 * * * *", "* * * *", "a b c d e", ""])
def test_invalid_expressions_fail(expression):
    outcome = decode_cron(expression, now=date(2024, 1, 1))

    assert not outcome.is_ok()
    assert outcome.error is not None


def test_is_cron_expression():
    assert is_cron_expression("0 0 * * *")
    assert is_cron_expression("*/5 * * * * *")
    assert is_cron_expression("0 9 * * 1-5")
    assert not is_cron_expression("0 0 * *")
    assert not is_cron_expression("0 0 * * * * *")
    assert not is_cron_expression("61 * * * *")
    assert not is_cron_expression("hello world")


def test_format_occurrence_uses_chinese_weekday():
    assert format_occurrence(datetime(2024, 1, 7, 8, 5, 9)) == "2024-01-07 星期日 08:05:09"
