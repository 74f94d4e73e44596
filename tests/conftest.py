# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

import random

import pytest

from splitseq import Characteristics


def _drain(cursor):
    out = []
    cursor.drain_remaining(out.append)
    return out


def _advance_all(cursor):
    out = []
    while cursor.try_advance(out.append):
        pass
    assert not cursor.try_advance(out.append)
    return out


def _split_fully(cursor, depth=0):
    prefix = cursor.try_split() if depth < 32 else None
    if prefix is None:
        return _drain(cursor)
    return _split_fully(prefix, depth + 1) + _split_fully(cursor, depth + 1)


def _check_split_sizes(cursor, before, prefix):
    # SUBSIZED cursors account for every element across a split
    assert prefix.has_characteristics(Characteristics.SIZED)
    assert prefix.estimate_size() + cursor.estimate_size() == before


def _random_traverse(cursor, rng, depth=0):
    head = []
    for _ in range(rng.randrange(3)):
        if not cursor.try_advance(head.append):
            break

    if depth < 12:
        subsized = cursor.has_characteristics(
            Characteristics.SIZED | Characteristics.SUBSIZED
        )
        before = cursor.estimate_size()
        prefix = cursor.try_split()
        if prefix is not None:
            if subsized:
                _check_split_sizes(cursor, before, prefix)
            return (
                head
                + _random_traverse(prefix, rng, depth + 1)
                + _random_traverse(cursor, rng, depth + 1)
            )

    if rng.random() < 0.5:
        return head + _drain(cursor)
    return head + _advance_all(cursor)


def _assert_same(expected, actual, ordered):
    assert len(actual) == len(expected)
    if ordered:
        assert list(actual) == list(expected)
    else:
        assert sorted(actual) == sorted(expected)


@pytest.fixture
def check_cursor():
    """
    Verify a cursor factory against the expected elements.

    Every traversal strategy an executor may use must reproduce ``expected``:
    sequential drain, advance-only, full recursive split, and seeded random
    interleavings of advance, split and drain.
    """

    def check(expected, make_cursor, seeds=range(10)):
        expected = list(expected)

        cursor = make_cursor()
        ordered = cursor.has_characteristics(Characteristics.ORDERED)
        if cursor.has_characteristics(Characteristics.SIZED):
            assert cursor.estimate_size() == len(expected)
        _assert_same(expected, _drain(cursor), ordered)
        assert cursor.estimate_size() == 0 or not cursor.has_characteristics(
            Characteristics.SIZED
        )
        assert _drain(cursor) == []

        _assert_same(expected, _advance_all(make_cursor()), ordered)
        _assert_same(expected, _split_fully(make_cursor()), ordered)

        for seed in seeds:
            rng = random.Random(seed)
            _assert_same(expected, _random_traverse(make_cursor(), rng), ordered)

        with pytest.raises(TypeError):
            make_cursor().try_advance(None)
        with pytest.raises(TypeError):
            make_cursor().drain_remaining(None)

    return check
