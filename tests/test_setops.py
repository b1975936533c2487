import pytest

from shardkit.setops import (
    clean_list,
    different_list,
    inter_list,
    make_between_list,
    make_ge_list,
    make_gt_list,
    make_le_list,
    make_list,
    make_lt_list,
    union_list,
)

DAYS = [20150802, 20150812, 20150822, 20150823, 20150825, 20150828]


def test_make_list():
    assert make_list(2, 5) == [2, 3, 4]
    assert make_list(0, 12) == list(range(12))
    assert make_list(3, 3) == []


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3], [2], [2]),
        ([1, 2, 3], [2, 3], [2, 3]),
        ([1, 2, 4], [2, 3], [2]),
        ([1, 2, 4], [], []),
    ],
)
def test_inter_list(l1, l2, expected):
    assert inter_list(l1, l2) == expected


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3], [2], [1, 2, 3]),
        ([1, 2, 4], [3], [1, 2, 3, 4]),
        ([1, 2, 3], [2, 3, 4], [1, 2, 3, 4]),
        ([1, 2, 3], [], [1, 2, 3]),
        ([], [4, 5], [4, 5]),
    ],
)
def test_union_list(l1, l2, expected):
    assert union_list(l1, l2) == expected


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3, 4], [2], [1, 3, 4]),
        ([1, 2, 3, 4], [], [1, 2, 3, 4]),
        ([1, 2, 3, 4], [1, 3, 5], [2, 4]),
        ([1, 2, 3], [1, 3, 5, 6], [2]),
        ([1, 2, 3, 4], [2, 3], [1, 4]),
        ([], [1, 2], []),
    ],
)
def test_different_list(l1, l2, expected):
    assert different_list(l1, l2) == expected


def test_clean_list():
    assert sorted(clean_list([1, 2, 2, 1, 5, 3, 5, 2])) == [1, 2, 3, 5]


def test_clean_list_keeps_first_occurrence_order():
    assert clean_list([5, 1, 5, 3, 1]) == [5, 1, 3]


def test_make_le_list():
    assert make_le_list(20150822, DAYS) == [20150802, 20150812, 20150822]
    assert make_le_list(20150824, DAYS) == []


def test_make_lt_list():
    assert make_lt_list(20150822, DAYS) == [20150802, 20150812]
    assert make_lt_list(20150824, DAYS) == []
    assert make_lt_list(20150802, DAYS) == []


def test_make_ge_list():
    assert make_ge_list(20150822, DAYS) == [20150822, 20150823, 20150825, 20150828]
    assert make_ge_list(20150828, DAYS) == [20150828]
    assert make_ge_list(20150824, DAYS) == []


def test_make_gt_list():
    assert make_gt_list(20150822, DAYS) == [20150823, 20150825, 20150828]
    assert make_gt_list(20150824, DAYS) == []
    assert make_gt_list(20150828, DAYS) == []


def test_make_between_list():
    assert make_between_list(20150812, 20150823, DAYS) == [20150812, 20150822, 20150823]
    assert make_between_list(20150823, 20150812, DAYS) == [20150812, 20150822, 20150823]
    assert make_between_list(20150825, 20150825, DAYS) == [20150825]


def test_make_between_list_missing_bound():
    assert make_between_list(20150813, 20150823, DAYS) == []
    assert make_between_list(20150812, 20150824, DAYS) == []


def test_union_and_difference_are_consistent():
    l1 = [0, 2, 4, 6, 8]
    l2 = [1, 2, 3, 4]
    union = union_list(l1, l2)
    assert union == sorted(set(union))
    assert different_list(union, l2) == [0, 6, 8]
    assert inter_list(union, l1) == l1