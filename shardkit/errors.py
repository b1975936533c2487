"""Exceptions raised while routing queries to shards."""


class RouterError(Exception):
    """Base class for every routing error."""


class DateRangeError(RouterError, ValueError):
    """A configured date range is malformed."""


class KeyOutOfRangeError(RouterError, LookupError):
    """A shard key falls outside every configured range."""


class ShardKeyError(RouterError, ValueError):
    """A shard key has an unsupported type or format."""


class ConfigError(RouterError, ValueError):
    """The sharding configuration is inconsistent."""


class UpdateKeyError(RouterError):
    """An update statement tries to change the sharding key."""