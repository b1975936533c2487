"""Sharding rules, shard key routing and SQL query fingerprinting."""

__version__ = "0.1.0"