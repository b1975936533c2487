"""Sharding configuration read from plain mappings (e.g. parsed YAML)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ConfigError

__all__ = ["RuleType", "ShardConfig", "SchemaConfig"]


class RuleType(str, Enum):
    """How a table is split into sub-tables."""

    DEFAULT = "default"
    HASH = "hash"
    RANGE = "range"
    DATE_YEAR = "date_year"
    DATE_MONTH = "date_month"
    DATE_DAY = "date_day"


def _ensure_mapping(data: object, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _get_str(data: Mapping[str, Any], name: str, default: str | None = None) -> str:
    value = data.get(name, default)
    if value is None:
        raise ConfigError(f"missing required field {name!r}")
    if not isinstance(value, str):
        raise ConfigError(f"field {name!r} must be a string")
    return value


def _get_int(data: Mapping[str, Any], name: str, default: int) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"field {name!r} must be an integer")
    return value


def _get_list(data: Mapping[str, Any], name: str) -> list[Any]:
    value = data.get(name)
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"field {name!r} must be a list")
    return list(value)


def _get_str_list(data: Mapping[str, Any], name: str) -> list[str]:
    items = _get_list(data, name)
    if not all(isinstance(item, str) for item in items):
        raise ConfigError(f"field {name!r} must be a list of strings")
    return items


def _get_count_list(data: Mapping[str, Any], name: str) -> list[int]:
    items = _get_list(data, name)
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int) or item < 0:
            raise ConfigError(f"field {name!r} must be a list of non-negative integers")
    return items


def _get_range_list(data: Mapping[str, Any], name: str) -> list[str]:
    ranges = []
    for item in _get_list(data, name):
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise ConfigError(f"field {name!r} must be a list of date ranges")
        ranges.append(str(item))
    return ranges


@dataclass
class ShardConfig:
    """Sharding rule of one table."""

    db: str
    table: str
    key: str
    type: RuleType
    nodes: list[str] = field(default_factory=list)
    locations: list[int] = field(default_factory=list)
    table_row_limit: int = 0
    date_range: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ShardConfig:
        """Build a shard config from a mapping with the configuration file's keys."""
        data = _ensure_mapping(data, "shard config")
        type_name = _get_str(data, "type")
        try:
            rule_type = RuleType(type_name)
        except ValueError as exc:
            raise ConfigError(f"unknown rule type {type_name!r}") from exc
        return cls(
            db=_get_str(data, "db"),
            table=_get_str(data, "table"),
            key=_get_str(data, "key"),
            type=rule_type,
            nodes=_get_str_list(data, "nodes"),
            locations=_get_count_list(data, "locations"),
            table_row_limit=_get_int(data, "table_row_limit", 0),
            date_range=_get_range_list(data, "date_range"),
        )


@dataclass
class SchemaConfig:
    """Backend nodes of a schema, its default node and its sharding rules."""

    nodes: list[str] = field(default_factory=list)
    default: str = ""
    shard: list[ShardConfig] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SchemaConfig:
        """Build a schema config from a mapping with the configuration file's keys."""
        data = _ensure_mapping(data, "schema config")
        return cls(
            nodes=_get_str_list(data, "nodes"),
            default=_get_str(data, "default", ""),
            shard=[ShardConfig.from_mapping(item) for item in _get_list(data, "shard")],
        )