"""Cell-level value parsing shared by all record normalizers.

Dates arrive as spreadsheet serial numbers, ISO strings, US-style strings or
already-parsed datetimes depending on how the export was produced. Every
parser here returns None on failure instead of raising; callers decide
whether a None is "absent" or a parse failure worth a diagnostic.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any

# Spreadsheet day zero. Using 1899-12-30 rather than 1899-12-31 absorbs the
# phantom 1900-02-29, so serial 1 lands on 1899-12-31 and serial 60+ is exact.
_SPREADSHEET_EPOCH = datetime(1899, 12, 30)
# 9999-12-31 is serial 2958465
_MAX_SERIAL = 2958466

_COMMON_TIMESTAMP_FORMATS = [
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%d-%b-%Y",
    "%d-%b-%y",
    "%b %d, %Y",
]

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
_MON_YY = re.compile(r"^([A-Za-z]{3,9})[-\s/]?(\d{2}|\d{4})$")
_MM_YY = re.compile(r"^(\d{1,2})[-/](\d{2}|\d{4})$")
_YYYY_MM = re.compile(r"^(\d{4})[-/](\d{1,2})$")
_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def from_spreadsheet_serial(serial: float) -> datetime | None:
    """Convert a spreadsheet serial day number (fraction = time of day)."""
    if not 0 < serial < _MAX_SERIAL:
        return None
    return _SPREADSHEET_EPOCH + timedelta(days=serial)


def parse_number(value: Any) -> float | None:
    """Parse a numeric cell, tolerating thousands separators, currency and percent signs."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value == value else None  # NaN check
    text = str(value).strip().replace(",", "").replace("$", "").rstrip("%").strip()
    if text.startswith("(") and text.endswith(")"):
        text = "-" + text[1:-1]
    if not _NUMBER.match(text):
        return None
    return float(text)


def parse_date(value: Any) -> datetime | None:
    """Parse a date cell into a naive datetime.

    Returns None if parsing fails.
    Supports: datetime/date objects, spreadsheet serials (numeric or numeric
    strings), ISO 8601 and common US formats.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        return from_spreadsheet_serial(float(value))

    text = str(value).strip()
    if not text:
        return None
    if _NUMBER.match(text):
        return from_spreadsheet_serial(float(text))

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in _COMMON_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def month_key(moment: datetime | date | None) -> str | None:
    if moment is None:
        return None
    return f"{moment.year:04d}-{moment.month:02d}"


def _expand_year(year: str) -> int:
    return 2000 + int(year) if len(year) == 2 else int(year)


def parse_month_bucket(value: Any) -> str | None:
    """Parse a cost-allocation period cell into a "YYYY-MM" bucket.

    Accepts "Jan-24", "January 2024", "06-25", "2025-06", and anything
    parse_date understands.
    """
    if value is None:
        return None
    if not isinstance(value, (datetime, date, int, float)):
        text = str(value).strip()
        match = _MON_YY.match(text)
        if match and match.group(1)[:3].casefold() in _MONTHS:
            month = _MONTHS[match.group(1)[:3].casefold()]
            return f"{_expand_year(match.group(2)):04d}-{month:02d}"
        match = _MM_YY.match(text)
        if match and 1 <= int(match.group(1)) <= 12:
            return f"{_expand_year(match.group(2)):04d}-{int(match.group(1)):02d}"
        match = _YYYY_MM.match(text)
        if match and 1 <= int(match.group(2)) <= 12:
            return f"{int(match.group(1)):04d}-{int(match.group(2)):02d}"
    return month_key(parse_date(value))


def month_range(start: str, months: int) -> list[str]:
    """Consecutive "YYYY-MM" buckets starting at *start*."""
    year, month = (int(part) for part in start.split("-"))
    buckets = []
    for _ in range(months):
        buckets.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            month = 1
            year += 1
    return buckets
