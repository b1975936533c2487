import zlib
from datetime import timezone

import pytest

from shardkit.errors import KeyOutOfRangeError, ShardKeyError
from shardkit.numkey import parse_num_sharding
from shardkit.shard import (
    DateDayShard,
    DateMonthShard,
    DateYearShard,
    DefaultShard,
    HashShard,
    NumRangeShard,
    encode_value,
    hash_value,
    num_value,
)


@pytest.fixture
def range_shard():
    return NumRangeShard(parse_num_sharding([4, 4, 4], 10000))


def test_encode_value_integer_is_big_endian():
    assert encode_value(1) == b"\x00" * 7 + b"\x01"


def test_encode_value_negative_wraps():
    assert encode_value(-1) == b"\xff" * 8


def test_encode_value_text_and_bytes():
    assert encode_value("kingshard") == b"kingshard"
    assert encode_value(b"abc") == b"abc"


def test_encode_value_rejects_float():
    with pytest.raises(ShardKeyError):
        encode_value(1.5)


def test_hash_value_integer_and_decimal_string():
    assert hash_value(11) == 11
    assert hash_value("123") == 123


def test_hash_value_non_numeric_uses_crc32():
    assert hash_value("test") == zlib.crc32(b"test")
    assert hash_value(b"test") == hash_value("test")


def test_hash_value_signed_string_is_not_numeric():
    assert hash_value("-5") == zlib.crc32(b"-5")


def test_hash_value_rejects_bool():
    with pytest.raises(ShardKeyError):
        hash_value(True)


def test_num_value_parses_strings_and_bytes():
    assert num_value("10000") == 10000
    assert num_value(b"-42") == -42


def test_num_value_wraps_to_int64():
    assert num_value(2**64 - 1) == -1


@pytest.mark.parametrize("bad", ["abc", "1.5", "", str(2**63)])
def test_num_value_invalid(bad):
    with pytest.raises(ShardKeyError):
        num_value(bad)


def test_hash_shard_modulo():
    shard = HashShard(12)
    assert shard.find_for_key(5) == 5
    assert shard.find_for_key(12) == 0
    assert shard.find_for_key(uint := 11) == uint


def test_hash_shard_results_stay_in_range():
    shard = HashShard(7)
    for key in ["a", "bb", "ccc", 100, 2**70, b"xyz"]:
        assert 0 <= shard.find_for_key(key) < 7


def test_num_range_shard_lookup(range_shard):
    assert range_shard.find_for_key(10000 - 1) == 0
    assert range_shard.find_for_key(10000) == 1
    assert range_shard.find_for_key("20000") == 2


def test_num_range_shard_out_of_range(range_shard):
    with pytest.raises(KeyOutOfRangeError):
        range_shard.find_for_key(12 * 10000)
    with pytest.raises(KeyOutOfRangeError):
        range_shard.find_for_key(-1)


def test_num_range_shard_boundaries(range_shard):
    assert range_shard.equal_start(10000, 1)
    assert not range_shard.equal_start(10001, 1)
    assert range_shard.equal_stop(20000, 1)
    assert not range_shard.equal_stop(20000, 2)


def test_date_year_shard():
    shard = DateYearShard(timezone.utc)
    assert shard.find_for_key(1457082679) == 2016
    assert shard.find_for_key("2015-03-06 13:37:26") == 2015
    assert shard.find_for_key("2015-03-06") == 2015


def test_date_year_shard_invalid():
    shard = DateYearShard(timezone.utc)
    with pytest.raises(ShardKeyError):
        shard.find_for_key("abcd-01-01")
    with pytest.raises(ShardKeyError):
        shard.find_for_key(b"2015")


def test_date_month_shard():
    shard = DateMonthShard(timezone.utc)
    assert shard.find_for_key(1457082679) == 201603
    assert shard.find_for_key("2016-05-07 12:23:56") == 201605
    assert shard.find_for_key("2016-05-06") == 201605


def test_date_month_shard_invalid():
    shard = DateMonthShard(timezone.utc)
    with pytest.raises(ShardKeyError):
        shard.find_for_key("2016-05")
    with pytest.raises(ShardKeyError):
        shard.find_for_key("2016-xx-06")


def test_date_day_shard():
    shard = DateDayShard(timezone.utc)
    assert shard.find_for_key(1457082679) == 20160304
    assert shard.find_for_key("2016-03-07 12:23:56") == 20160307
    assert shard.find_for_key("2016-03-07") == 20160307


def test_date_day_shard_invalid():
    shard = DateDayShard(timezone.utc)
    with pytest.raises(ShardKeyError):
        shard.find_for_key("2016-3-7")
    with pytest.raises(ShardKeyError):
        shard.find_for_key(3.5)


def test_date_shards_agree_with_each_other():
    ts = 1457242646
    year = DateYearShard(timezone.utc).find_for_key(ts)
    month = DateMonthShard(timezone.utc).find_for_key(ts)
    day = DateDayShard(timezone.utc).find_for_key(ts)
    assert month // 100 == year
    assert day // 100 == month


def test_default_shard_always_zero():
    shard = DefaultShard()
    assert shard.find_for_key(11) == 0
    assert shard.find_for_key("anything") == 0