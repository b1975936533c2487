"""Sharding rules: how one table is split into sub-tables spread over nodes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .config import RuleType, ShardConfig
from .errors import ConfigError, DateRangeError, KeyOutOfRangeError, UpdateKeyError
from .numkey import parse_day_range, parse_month_range, parse_num_sharding, parse_year_range
from .setops import clean_list
from .shard import (
    DateDayShard,
    DateMonthShard,
    DateYearShard,
    DefaultShard,
    HashShard,
    NumRangeShard,
    Shard,
)

__all__ = ["Rule", "new_default_rule", "parse_rule"]

_DATE_PARSERS: dict[RuleType, Callable[[str], list[int]]] = {
    RuleType.DATE_DAY: parse_day_range,
    RuleType.DATE_MONTH: parse_month_range,
    RuleType.DATE_YEAR: parse_year_range,
}


@dataclass
class Rule:
    """Sharding rule of one table.

    ``sub_table_indexes`` holds every sub-table index in ascending order and
    ``table_to_node`` maps each of them to the position of its node in ``nodes``.
    """

    db: str = ""
    table: str = ""
    key: str = ""
    type: RuleType = RuleType.DEFAULT
    nodes: list[str] = field(default_factory=list)
    sub_table_indexes: list[int] = field(default_factory=list)
    table_to_node: dict[int, int] = field(default_factory=dict)
    shard: Shard = field(default_factory=DefaultShard)

    def find_table_index(self, key: int | str | bytes) -> int:
        """Return the sub-table index that ``key`` belongs to."""
        return self.shard.find_for_key(key)

    def find_node_index(self, key: int | str | bytes) -> int:
        """Return the position in ``nodes`` of the node holding ``key``."""
        return self.table_to_node.get(self.find_table_index(key), 0)

    def find_node(self, key: int | str | bytes) -> str:
        """Return the name of the node holding ``key``."""
        return self.nodes[self.find_node_index(key)]

    def check_update_columns(self, columns: Iterable[str]) -> None:
        """Raise UpdateKeyError if ``columns`` would change the sharding key."""
        if self.type is RuleType.DEFAULT or len(self.nodes) == 1:
            return
        for column in columns:
            if column == self.key:
                raise UpdateKeyError(f"the sharding key {self.key!r} cannot be updated")

    def table_indexes_to_node_indexes(self, table_indexes: Iterable[int]) -> list[int]:
        """Map sub-table indexes to the distinct node positions holding them."""
        return clean_list([self.table_to_node.get(index, 0) for index in table_indexes])

    def adjust_shard_index(self, value: int | str | bytes, index: int) -> int:
        """Step back one range when ``value`` is exactly the start of range ``index``.

        Only range shards are adjusted; other shards return ``index`` unchanged.
        """
        if not isinstance(self.shard, NumRangeShard):
            return index
        if self.shard.equal_start(value, index):
            index -= 1
            if index < 0:
                raise KeyOutOfRangeError("invalid range sharding")
        return index


def new_default_rule(node: str) -> Rule:
    """Return the rule that sends every table without a sharding rule to ``node``."""
    return Rule(type=RuleType.DEFAULT, nodes=[node], shard=DefaultShard())


def _numbered_tables(config: ShardConfig, rule: Rule) -> None:
    if len(config.locations) != len(rule.nodes):
        raise ConfigError("locations count does not match nodes count")
    table = 0
    for node_index, count in enumerate(config.locations):
        for _ in range(count):
            rule.sub_table_indexes.append(table)
            rule.table_to_node[table] = node_index
            table += 1


def _dated_tables(config: ShardConfig, rule: Rule) -> None:
    if len(config.date_range) != len(rule.nodes):
        raise ConfigError("date_range count does not match nodes count")
    parse = _DATE_PARSERS[rule.type]
    for node_index, date_range in enumerate(config.date_range):
        numbers = parse(date_range)
        if not numbers:
            raise DateRangeError(f"date range {date_range!r} is empty")
        if rule.sub_table_indexes and rule.sub_table_indexes[-1] >= numbers[0]:
            raise ConfigError("date ranges must be ascending and must not overlap")
        for number in numbers:
            rule.sub_table_indexes.append(number)
            rule.table_to_node[number] = node_index


def _make_shard(config: ShardConfig, rule: Rule) -> Shard:
    if rule.type is RuleType.HASH:
        return HashShard(shard_num=len(rule.table_to_node))
    if rule.type is RuleType.RANGE:
        ranges = parse_num_sharding(config.locations, config.table_row_limit)
        if len(ranges) != len(rule.table_to_node):
            raise ConfigError(
                f"range space {len(ranges)} not equal tables {len(rule.table_to_node)}"
            )
        return NumRangeShard(shards=tuple(ranges))
    if rule.type is RuleType.DATE_DAY:
        return DateDayShard()
    if rule.type is RuleType.DATE_MONTH:
        return DateMonthShard()
    if rule.type is RuleType.DATE_YEAR:
        return DateYearShard()
    return DefaultShard()


def parse_rule(config: ShardConfig) -> Rule:
    """Build the rule of one sharded table from its configuration."""
    rule = Rule(
        db=config.db,
        table=config.table,
        key=config.key.lower(),
        type=RuleType(config.type),
        nodes=list(config.nodes),
    )
    if rule.type in (RuleType.HASH, RuleType.RANGE):
        _numbered_tables(config, rule)
    elif rule.type in _DATE_PARSERS:
        _dated_tables(config, rule)
    rule.shard = _make_shard(config, rule)
    return rule