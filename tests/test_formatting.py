from datetime import date, datetime

from utils.formatting import (
    format_abs_currency,
    format_currency,
    format_date,
    format_long_date,
    format_time,
    parse_date,
)


def test_currency_uses_dot_grouping():
    assert format_currency(250000) == "Rp 250.000"
    assert format_currency(1234567.6) == "Rp 1.234.568"
    assert format_currency(-5000) == "-Rp 5.000"


def test_currency_blank_for_missing_or_zero():
    assert format_currency(None) == "-"
    assert format_currency(0, blank="Rp 0") == "Rp 0"


def test_abs_currency_drops_sign():
    assert format_abs_currency(-20000) == "Rp 20.000"


def test_dates():
    assert format_date("2024-05-03") == "3/5/2024"
    assert format_date("2024-05-03T10:15:00Z") == "3/5/2024"
    assert format_date(date(2024, 12, 31)) == "31/12/2024"
    assert format_date("not a date") == "-"
    assert format_date(None) == "-"


def test_time_and_parse():
    assert format_time("2024-05-03T08:05:00") == "08:05"
    assert format_time(None) == "--:--"
    assert parse_date(datetime(2024, 1, 2, 3, 4)) == datetime(2024, 1, 2, 3, 4)


def test_long_date_is_indonesian():
    assert format_long_date(date(2025, 8, 4)) == "Senin, 4 Agt 2025"
    assert format_long_date(date(2024, 12, 29)) == "Minggu, 29 Des 2024"
