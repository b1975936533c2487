"""Routing of tables to their sharding rules across a schema's nodes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .config import RuleType, SchemaConfig
from .errors import ConfigError, KeyOutOfRangeError
from .rules import Rule, new_default_rule, parse_rule

__all__ = ["Router", "build_router"]


@dataclass
class Router:
    """Sharding rules of a schema, indexed by database and table name."""

    rules: dict[str, dict[str, Rule]] = field(default_factory=dict)
    default_rule: Rule = field(default_factory=lambda: new_default_rule(""))
    nodes: list[str] = field(default_factory=list)

    def get_rule(self, db: str, table: str) -> Rule:
        """Return the rule of ``table`` in ``db``.

        A table written as ``db.table`` (optionally back-quoted) overrides
        ``db``. Tables without a sharding rule get a copy of the default rule
        bound to that database and table.
        """
        parts = table.split(".")
        if len(parts) == 2:
            db = parts[0].strip("`")
            table = parts[1].strip("`")
        rule = self.rules.get(db, {}).get(table)
        if rule is None:
            return replace(self.default_rule, db=db, table=table)
        return rule

    def sub_table_names(self, rule: Rule, table_indexes: Iterable[int]) -> dict[str, list[str]]:
        """Group the names of the given sub-tables by the node holding them.

        Sub-tables are named ``<table>_<index>`` with the index zero-padded
        to four digits. With no indexes the table itself goes to the rule's
        first node.
        """
        indexes = list(table_indexes)
        if not indexes:
            if not rule.nodes:
                raise ConfigError(f"rule of table {rule.table!r} has no nodes")
            return {rule.nodes[0]: [rule.table]}
        names: dict[str, list[str]] = {}
        for index in indexes:
            if index not in rule.table_to_node:
                raise KeyOutOfRangeError(
                    f"sub-table index {index} is not part of table {rule.table!r}"
                )
            node = rule.nodes[rule.table_to_node[index]]
            names.setdefault(node, []).append(f"{rule.table}_{index:04d}")
        return names


def build_router(schema_config: SchemaConfig) -> Router:
    """Build a router from a schema configuration, checking it for consistency."""
    if schema_config.default not in schema_config.nodes:
        raise ConfigError(f"default node[{schema_config.default}] not in the nodes list")

    router = Router(
        rules={},
        default_rule=new_default_rule(schema_config.default),
        nodes=list(schema_config.nodes),
    )

    for shard in schema_config.shard:
        for node in shard.nodes:
            if node not in router.nodes:
                raise ConfigError(
                    f"shard table[{shard.table}] node[{node}] not in the "
                    f"schema.nodes list:[{','.join(shard.nodes)}]"
                )
        rule = parse_rule(shard)
        if rule.type is RuleType.DEFAULT:
            raise ConfigError("[default-rule] duplicate, must only one")
        tables = router.rules.setdefault(rule.db, {})
        if rule.table in tables:
            raise ConfigError(f"table {rule.table} rule in {rule.db} duplicate")
        tables[rule.table] = rule

    return router