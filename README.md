# shardkit

Building blocks for spreading MySQL-style tables over sharded sub-tables:

- **Sharding rules**: hash, numeric range and date (year, month, day) rules
  that map a shard key to a sub-table index and to the node holding it.
- **Routing**: a router built from a schema configuration that picks the
  rule for a `db.table` pair and names the sub-tables on each node.
- **Query fingerprints**: the canonical form of a SQL statement, with
  literals replaced by `?`, whitespace collapsed, comments removed and text
  lowercased, plus short hashes of it.

## Installation

```
pip install .
```

The package needs no third-party libraries.

## Fingerprinting queries

```python
from shardkit.fingerprint import get_fingerprint
from shardkit.digest import fingerprint_id, fingerprint_md5

fp = get_fingerprint("SELECT c FROM t WHERE id=1")
# 'select c from t where id=?'

get_fingerprint("insert into foo(a, b, c) values(2, 4, 5) , (2,4,5)")
# 'insert into foo(a, b, c) values(?+)'

get_fingerprint("select * from t where i=1 order by a, b ASC, d DESC")
# 'select * from t where i=? order by a, b, d desc'

get_fingerprint("SELECT c FROM org235.t", replace_numbers_in_words=True)
# 'select c from org?.t'

fingerprint_md5(fp)  # full lowercase md5 hex digest
fingerprint_id(fp)   # last 16 hex digits of the md5, uppercased
```

## Date and number ranges

```python
from shardkit.numkey import (
    NumKeyRange, parse_num_sharding,
    parse_year_range, parse_month_range, parse_day_range,
)

parse_year_range("2017-2013")          # [2013, 2014, 2015, 2016, 2017]
parse_month_range("201603-201511")     # [201511, 201512, 201601, 201602, 201603]
parse_day_range("20160227-20160301")   # [20160227, 20160228, 20160229, 20160301]

parse_num_sharding([2, 1], 100)
# [NumKeyRange(start=0, end=100), NumKeyRange(start=100, end=200),
#  NumKeyRange(start=200, end=300)]
```

Bounds given in reverse order are swapped. A malformed range raises
`shardkit.errors.DateRangeError`.

## Shards

`shardkit.shard` has the key-to-table mappings: `HashShard`,
`NumRangeShard`, `DateYearShard`, `DateMonthShard`, `DateDayShard` and
`DefaultShard`, each with `find_for_key(key)`. Date shards accept
`YYYY-MM-DD[ HH:MM:SS]` strings or unix timestamps; timestamps are read in
the shard's `tz`, or in local time when it is `None`. The helpers
`encode_value`, `hash_value` and `num_value` convert keys.

## Building a router

```python
from shardkit.config import SchemaConfig
from shardkit.router import build_router

schema = SchemaConfig.from_mapping({
    "nodes": ["node1", "node2", "node3"],
    "default": "node1",
    "shard": [
        {
            "db": "shop",
            "table": "orders",
            "key": "id",
            "type": "hash",
            "nodes": ["node2", "node3"],
            "locations": [16, 16],
        },
        {
            "db": "shop",
            "table": "events",
            "key": "date",
            "type": "date_month",
            "nodes": ["node2", "node3"],
            "date_range": ["201512-201603", "201604-201608"],
        },
    ],
})

router = build_router(schema)

orders = router.get_rule("shop", "orders")
orders.find_table_index(11)    # 11
orders.find_node(11)           # 'node2'

events = router.get_rule("shop", "events")
events.find_node("2016-05-07 12:23:56")   # 'node3'

router.sub_table_names(orders, [0, 1, 20])
# {'node2': ['orders_0000', 'orders_0001'], 'node3': ['orders_0020']}
```

`get_rule` also accepts `"db.table"` (optionally back-quoted) as the table
name. Tables without a sharding rule get a copy of the default rule, which
sends everything to the default node.

A `Rule` also offers `find_node_index`, `table_indexes_to_node_indexes`,
`adjust_shard_index` and `check_update_columns`, which raises
`UpdateKeyError` when an update would change the sharding key of a table
spread over more than one node.

## Set helpers

`shardkit.setops` has the list operations used when combining conditions:
`inter_list`, `union_list` and `different_list` on sorted lists,
`clean_list` (drops duplicates, keeping first occurrences), `make_list`, and
the `make_le_list` / `make_ge_list` / `make_lt_list` / `make_gt_list` /
`make_between_list` slicers.

## Errors

Everything the package raises for a bad key, range or configuration derives
from `shardkit.errors.RouterError`: `DateRangeError`, `KeyOutOfRangeError`,
`ShardKeyError`, `ConfigError` and `UpdateKeyError`.

## What it does not do

shardkit does not parse SQL statements, build execution plans from them or
rewrite them for sub-tables, and it does not run a proxy or talk to any
database. It gives the rules, key lookups and sub-table names; sending
queries to the nodes is left to the caller. Configuration is read from
plain mappings, so loading a configuration file is also up to the caller.

## Running the tests

```
pip install ".[test]"
pytest
```