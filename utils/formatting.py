from __future__ import annotations

"""Display helpers for Indonesian Rupiah amounts and dates."""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]


def format_currency(amount: Optional[float], *, blank: str = "-") -> str:
    """Return ``amount`` as ``Rp 250.000`` (no decimals, dot thousands).

    Missing or zero amounts render as ``blank``. Negative amounts keep the
    sign in front of the currency symbol.
    """

    if not amount:
        return blank
    rounded = int(round(float(amount)))
    grouped = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}Rp {grouped}"


def format_abs_currency(amount: Optional[float], *, blank: str = "-") -> str:
    """Currency without sign; finance rows carry direction in their type."""

    if not amount:
        return blank
    return format_currency(abs(float(amount)), blank=blank)


def parse_date(value: DateLike) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: DateLike, *, blank: str = "-") -> str:
    """Return ``d/m/yyyy`` for ISO strings or date objects."""

    parsed = parse_date(value)
    if parsed is None:
        return blank
    return f"{parsed.day}/{parsed.month}/{parsed.year}"


def format_time(value: DateLike, *, blank: str = "--:--") -> str:
    """Return ``HH:MM`` for timestamps (alert banner)."""

    parsed = parse_date(value)
    if parsed is None:
        return blank
    return parsed.strftime("%H:%M")


def format_long_date(value: date) -> str:
    """Return e.g. ``Senin, 4 Agt 2025`` for the courier page header."""

    days = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
    months = (
        "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
        "Jul", "Agt", "Sep", "Okt", "Nov", "Des",
    )
    return f"{days[value.weekday()]}, {value.day} {months[value.month - 1]} {value.year}"


__all__ = [
    "format_currency",
    "format_abs_currency",
    "format_date",
    "format_time",
    "format_long_date",
    "parse_date",
]
