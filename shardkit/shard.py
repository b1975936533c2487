"""Shard lookup: map a sharding key to the index of a sub-table."""

from __future__ import annotations

import re
import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from .errors import KeyOutOfRangeError, ShardKeyError
from .numkey import NumKeyRange

__all__ = [
    "Shard",
    "HashShard",
    "NumRangeShard",
    "DateYearShard",
    "DateMonthShard",
    "DateDayShard",
    "DefaultShard",
    "encode_value",
    "hash_value",
    "num_value",
]

_UINT64 = 1 << 64
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_UNSIGNED = re.compile(r"[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")

_DATE_FORMAT_LENGTH = len("2006-01-02")


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _to_int64(value: int) -> int:
    """Wrap an integer into the signed 64-bit range."""
    return ((value - _INT64_MIN) % _UINT64) + _INT64_MIN


def _type_error(value: object) -> ShardKeyError:
    return ShardKeyError(f"unexpected key variable type {type(value).__name__}")


def _parse_int64(text: str) -> int | None:
    if not _SIGNED.fullmatch(text):
        return None
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number


def encode_value(value: int | str | bytes) -> bytes:
    """Encode a key as bytes: integers as 8 big-endian bytes, text as UTF-8."""
    if _is_integer(value):
        return (value % _UINT64).to_bytes(8, "big")
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise _type_error(value)


def hash_value(value: int | str | bytes) -> int:
    """Return the unsigned 64-bit hash of a key.

    Integers hash to themselves, decimal strings to their value and any
    other text or bytes to their CRC-32 checksum.
    """
    if _is_integer(value):
        return value % _UINT64
    if isinstance(value, str):
        if _UNSIGNED.fullmatch(value):
            number = int(value)
            if number < _UINT64:
                return number
        return zlib.crc32(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray)):
        return zlib.crc32(bytes(value))
    raise _type_error(value)


def num_value(value: int | str | bytes) -> int:
    """Return a key as a signed 64-bit integer."""
    if _is_integer(value):
        return _to_int64(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ShardKeyError(f"invalid num format {value!r}") from exc
    if isinstance(value, str):
        number = _parse_int64(value)
        if number is None:
            raise ShardKeyError(f"invalid num format {value!r}")
        return number
    raise _type_error(value)


def _timestamp_to_datetime(timestamp: int, tz: tzinfo | None) -> datetime:
    try:
        return datetime.fromtimestamp(_to_int64(timestamp), tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise ShardKeyError(f"timestamp {timestamp} out of range") from exc


def _date_digits(value: str, *slices: slice) -> int:
    """Join the given slices of a ``YYYY-MM-DD`` string and parse them as an integer."""
    if len(value) < _DATE_FORMAT_LENGTH:
        raise ShardKeyError(f"invalid date format {value}")
    number = _parse_int64("".join(value[part] for part in slices))
    if number is None:
        raise ShardKeyError(f"invalid date format {value}")
    return number


class Shard(ABC):
    """Maps a sharding key to a sub-table index."""

    @abstractmethod
    def find_for_key(self, key: int | str | bytes) -> int:
        """Return the sub-table index for ``key``."""


@dataclass(frozen=True)
class HashShard(Shard):
    """Distributes keys over ``shard_num`` tables by hash modulo."""

    shard_num: int

    def find_for_key(self, key: int | str | bytes) -> int:
        return hash_value(key) % self.shard_num


@dataclass(frozen=True)
class NumRangeShard(Shard):
    """Assigns numeric keys to consecutive half-open ranges."""

    shards: tuple[NumKeyRange, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "shards", tuple(self.shards))

    def find_for_key(self, key: int | str | bytes) -> int:
        value = num_value(key)
        for index, key_range in enumerate(self.shards):
            if key_range.contains(value):
                return index
        raise KeyOutOfRangeError(f"key {value} is out of range")

    def equal_start(self, key: int | str | bytes, index: int) -> bool:
        """Whether ``key`` is exactly the start of range ``index``."""
        return self.shards[index].start == num_value(key)

    def equal_stop(self, key: int | str | bytes, index: int) -> bool:
        """Whether ``key`` is exactly the end of range ``index``."""
        return self.shards[index].end == num_value(key)


@dataclass(frozen=True)
class DateYearShard(Shard):
    """Shards by year; keys are ``YYYY-MM-DD[ HH:MM:SS]`` or a unix timestamp.

    Timestamps are read in ``tz``, or in local time when it is ``None``.
    """

    tz: tzinfo | None = None

    def find_for_key(self, key: int | str) -> int:
        if _is_integer(key):
            return _timestamp_to_datetime(key, self.tz).year
        if isinstance(key, str):
            if len(key) < 4:
                raise ShardKeyError(f"invalid date format {key}")
            year = _parse_int64(key[:4])
            if year is None:
                raise ShardKeyError(f"invalid num format {key[:4]!r}")
            return year
        raise _type_error(key)


@dataclass(frozen=True)
class DateMonthShard(Shard):
    """Shards by month as ``YYYYMM``; keys are dates or unix timestamps."""

    tz: tzinfo | None = None

    def find_for_key(self, key: int | str) -> int:
        if _is_integer(key):
            moment = _timestamp_to_datetime(key, self.tz)
            return int(moment.strftime("%Y%m"))
        if isinstance(key, str):
            return _date_digits(key, slice(0, 4), slice(5, 7))
        raise _type_error(key)


@dataclass(frozen=True)
class DateDayShard(Shard):
    """Shards by day as ``YYYYMMDD``; keys are dates or unix timestamps."""

    tz: tzinfo | None = None

    def find_for_key(self, key: int | str) -> int:
        if _is_integer(key):
            moment = _timestamp_to_datetime(key, self.tz)
            return int(moment.strftime("%Y%m%d"))
        if isinstance(key, str):
            return _date_digits(key, slice(0, 4), slice(5, 7), slice(8, 10))
        raise _type_error(key)


@dataclass(frozen=True)
class DefaultShard(Shard):
    """Sends every key to table 0."""

    def find_for_key(self, key: object) -> int:
        return 0