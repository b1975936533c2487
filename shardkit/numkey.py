"""Numeric key ranges and parsing of date-range specifications."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .errors import DateRangeError

__all__ = [
    "MIN_NUM_KEY",
    "MAX_NUM_KEY",
    "NumKeyRange",
    "parse_num_sharding",
    "parse_day_range",
    "parse_month_range",
    "parse_year_range",
]

MIN_NUM_KEY = -(2**63)
MAX_NUM_KEY = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class NumKeyRange:
    """Half-open numeric range ``[start, end)``; an end of MAX_NUM_KEY is unbounded."""

    start: int
    end: int

    def map_key(self) -> str:
        return f"{self.start}-{self.end}"

    def contains(self, value: int) -> bool:
        return self.start <= value and (self.end == MAX_NUM_KEY or value < self.end)

    def __str__(self) -> str:
        return f"{{Start: {self.start}, End: {self.end}}}"


def parse_num_sharding(locations: list[int], table_row_limit: int) -> list[NumKeyRange]:
    """Split the key space into consecutive ranges of ``table_row_limit`` keys per table."""
    table_count = sum(locations)
    return [
        NumKeyRange(i * table_row_limit, (i + 1) * table_row_limit)
        for i in range(table_count)
    ]


def _to_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise DateRangeError(f"invalid number {text!r}")
    return int(text)


def _split_range(date_range: str, length: int) -> list[str] | int:
    """Return the single parsed value, or the ordered pair of range bounds."""
    parts = date_range.split("-", 1)
    if len(parts) == 1:
        if len(parts[0]) != length:
            raise DateRangeError(f"date range {date_range!r} is illegal")
        return _to_int(parts[0])
    begin, end = parts
    if end < begin:
        begin, end = end, begin
    return [begin, end]


def _check_lengths(bounds: list[str], length: int, date_range: str) -> None:
    if any(len(bound) != length for bound in bounds):
        raise DateRangeError(f"date range {date_range!r} is illegal")


def _parse_day(text: str) -> date:
    if not _DIGITS.fullmatch(text):
        raise DateRangeError(f"invalid date {text!r}")
    try:
        return datetime.strptime(text, "%Y%m%d").date()
    except ValueError as exc:
        raise DateRangeError(f"invalid date {text!r}") from exc


def parse_day_range(date_range: str) -> list[int]:
    """Expand ``YYYYMMDD-YYYYMMDD`` into every day as an integer, in order."""
    parsed = _split_range(date_range, 8)
    if isinstance(parsed, int):
        return [parsed]
    _check_lengths(parsed, 8, date_range)
    begin = _parse_day(parsed[0])
    end = _parse_day(parsed[1])
    days = (end - begin).days
    return [
        int((begin + timedelta(days=offset)).strftime("%Y%m%d"))
        for offset in range(days + 1)
    ]


def parse_month_range(date_range: str) -> list[int]:
    """Expand ``YYYYMM-YYYYMM`` into every month as an integer, in order."""
    parsed = _split_range(date_range, 6)
    if isinstance(parsed, int):
        return [parsed]
    _check_lengths(parsed, 6, date_range)
    begin, end = parsed
    year = _to_int(begin[:4])
    begin_month = _to_int(begin[4:])
    end_year = _to_int(end[:4])
    end_month = _to_int(end[4:])

    count = (end_year - year) * 12 + end_month - begin_month + 1
    months = []
    month = begin_month
    for _ in range(count):
        if month > 12:
            month %= 12
            year += 1
        months.append(year * 100 + month)
        month += 1
    return months


def parse_year_range(date_range: str) -> list[int]:
    """Expand ``YYYY-YYYY`` into every year, in order."""
    parsed = _split_range(date_range, 4)
    if isinstance(parsed, int):
        return [parsed]
    begin = _to_int(parsed[0])
    end = _to_int(parsed[1])
    return list(range(begin, end + 1))