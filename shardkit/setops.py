"""Operations on ordered lists of sub-table indexes."""

from __future__ import annotations

__all__ = [
    "make_list",
    "make_le_list",
    "make_ge_list",
    "make_lt_list",
    "make_gt_list",
    "make_between_list",
    "inter_list",
    "union_list",
    "different_list",
    "clean_list",
]


def make_list(start: int, end: int) -> list[int]:
    """Return ``[start, start + 1, ..., end - 1]``."""
    return list(range(start, end))


def _position(value: int, indexes: list[int]) -> int | None:
    try:
        return indexes.index(value)
    except ValueError:
        return None


def make_le_list(value: int, indexes: list[int]) -> list[int]:
    """Indexes up to and including ``value``; empty if ``value`` is absent."""
    pos = _position(value, indexes)
    return [] if pos is None else indexes[: pos + 1]


def make_ge_list(value: int, indexes: list[int]) -> list[int]:
    """Indexes from ``value`` onwards; empty if ``value`` is absent."""
    pos = _position(value, indexes)
    return [] if pos is None else indexes[pos:]


def make_lt_list(value: int, indexes: list[int]) -> list[int]:
    """Indexes strictly before ``value``; empty if ``value`` is absent."""
    pos = _position(value, indexes)
    return [] if pos is None else indexes[:pos]


def make_gt_list(value: int, indexes: list[int]) -> list[int]:
    """Indexes strictly after ``value``; empty if ``value`` is absent."""
    pos = _position(value, indexes)
    return [] if pos is None else indexes[pos + 1 :]


def make_between_list(start: int, end: int, indexes: list[int]) -> list[int]:
    """Indexes from ``start`` to ``end`` inclusive; empty unless both are present in order."""
    if end < start:
        start, end = end, start
    start_pos: int | None = None
    for pos, value in enumerate(indexes):
        if value == start:
            start_pos = pos
        if value == end and start_pos is not None:
            return indexes[start_pos : pos + 1]
    return []


def inter_list(l1: list[int], l2: list[int]) -> list[int]:
    """Intersection of two sorted lists."""
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        if l1[i] == l2[j]:
            result.append(l1[i])
            i += 1
            j += 1
        elif l1[i] < l2[j]:
            i += 1
        else:
            j += 1
    return result


def union_list(l1: list[int], l2: list[int]) -> list[int]:
    """Union of two sorted lists, kept sorted."""
    if not l1:
        return list(l2)
    if not l2:
        return list(l1)
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        if l1[i] < l2[j]:
            result.append(l1[i])
            i += 1
        elif l1[i] > l2[j]:
            result.append(l2[j])
            j += 1
        else:
            result.append(l1[i])
            i += 1
            j += 1
    result.extend(l1[i:])
    result.extend(l2[j:])
    return result


def different_list(l1: list[int], l2: list[int]) -> list[int]:
    """Elements of sorted ``l1`` that are not in sorted ``l2``."""
    if not l1:
        return []
    if not l2:
        return list(l1)
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        if l1[i] < l2[j]:
            result.append(l1[i])
            i += 1
        elif l1[i] > l2[j]:
            j += 1
        else:
            i += 1
            j += 1
    result.extend(l1[i:])
    return result


def clean_list(values: list[int]) -> list[int]:
    """Remove duplicates, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))