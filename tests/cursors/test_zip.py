# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

import operator

import numpy as np
import pytest

from splitseq import (
    Characteristics,
    Op,
    OpKind,
    ZipCursor,
    from_numpy_dtype,
    to_array,
    zip_arrays,
)

DTYPE_LIST = [
    np.int32,
    np.int64,
    np.float32,
    np.float64,
]


def random_array(size, dtype, max_value=100):
    rng = np.random.default_rng(42)
    if np.issubdtype(dtype, np.integer):
        return rng.integers(max_value, size=size, dtype=dtype)
    return rng.random(size=size, dtype=dtype)


@pytest.mark.parametrize("dtype", DTYPE_LIST)
@pytest.mark.parametrize("size", [0, 1, 2, 7, 100])
def test_zip_cursor(check_cursor, dtype, size):
    first = random_array(size, dtype)
    second = random_array(size, dtype)[::-1].copy()
    expected = [a - b for a, b in zip(first, second)]
    check_cursor(expected, lambda: zip_arrays(first, second, OpKind.MINUS))


def test_zip_python_lists(check_cursor):
    first = [5, 4, 3, 2, 1]
    second = [1, 2, 3, 4, 5]
    check_cursor(
        [4, 2, 0, -2, -4], lambda: zip_arrays(first, second, lambda a, b: a - b)
    )


def test_zip_length_mismatch():
    with pytest.raises(ValueError, match="lengths differ"):
        zip_arrays(np.zeros(3), np.zeros(4), OpKind.PLUS)


def test_zip_range_validation():
    a = np.zeros(4)
    with pytest.raises(ValueError):
        ZipCursor(a, a, OpKind.PLUS, -1, 2)
    with pytest.raises(ValueError):
        ZipCursor(a, a, OpKind.PLUS, 3, 2)
    with pytest.raises(ValueError):
        ZipCursor(a, a, OpKind.PLUS, 0, 5)


def test_zip_sub_range():
    a = np.arange(10)
    b = np.arange(10) * 10
    cursor = ZipCursor(a, b, OpKind.PLUS, 2, 5)
    assert cursor.estimate_size() == 3
    assert list(cursor) == [22, 33, 44]


def test_zip_op_must_be_callable():
    with pytest.raises(TypeError):
        zip_arrays([1], [2], "plus")


def test_zip_split_is_arithmetic():
    a = np.arange(9)
    cursor = zip_arrays(a, a, OpKind.PLUS)
    prefix = cursor.try_split()
    assert prefix.estimate_size() == 4
    assert cursor.estimate_size() == 5
    assert list(prefix) == [0, 2, 4, 6]

    single = zip_arrays(a[:1], a[:1], OpKind.PLUS)
    assert single.try_split() is None


def test_zip_characteristics():
    a = np.arange(4.0)
    cursor = zip_arrays(a, a, OpKind.MULTIPLIES)
    assert cursor.has_characteristics(
        Characteristics.ORDERED
        | Characteristics.SIZED
        | Characteristics.SUBSIZED
        | Characteristics.IMMUTABLE
        | Characteristics.NONNULL
    )


def test_zip_widens_narrow_source():
    narrow = np.array([0.1, 0.2, 0.3], dtype=np.float32)
    wide = np.array([1.0, 2.0, 3.0], dtype=np.float64)
    cursor = zip_arrays(narrow, wide, OpKind.PLUS, dtype=np.float64)
    assert cursor.value_type == from_numpy_dtype(np.float64)

    out = list(cursor)
    expected = narrow.astype(np.float64) + wide
    assert all(isinstance(x, np.float64) for x in out)
    np.testing.assert_array_equal(np.array(out), expected)

    # single-step and bulk paths widen identically
    cursor = zip_arrays(narrow, wide, OpKind.PLUS, dtype=np.float64)
    head = []
    cursor.try_advance(head.append)
    cursor.drain_remaining(head.append)
    np.testing.assert_array_equal(np.array(head), expected)


def test_zip_widening_is_exact():
    narrow = np.array([16777217], dtype=np.int32)
    cursor = zip_arrays(narrow, narrow, lambda a, b: a, dtype=np.int64)
    assert list(cursor) == [16777217]


def test_zip_rejects_narrowing():
    wide = np.zeros(3, dtype=np.float64)
    with pytest.raises(TypeError):
        zip_arrays(wide, wide, OpKind.PLUS, dtype=np.float32)


def test_zip_result_type_from_op_kind():
    a = np.arange(3, dtype=np.int32)
    b = np.arange(3, dtype=np.float64)
    cursor = zip_arrays(a, b, OpKind.PLUS)
    assert cursor.value_type == from_numpy_dtype(np.float64)


def test_zip_declared_result_type():
    a = np.arange(3, dtype=np.int64)
    cursor = zip_arrays(a, a, Op(operator.truediv, result_type=np.float64))
    assert cursor.value_type == from_numpy_dtype(np.float64)


def test_zip_inferred_result_type():
    a = np.arange(4, dtype=np.float64)
    cursor = zip_arrays(a, a, lambda x, y: x * y)
    assert cursor.value_type == from_numpy_dtype(np.float64)
    result = to_array(cursor)
    assert result.dtype == np.float64
    np.testing.assert_array_equal(result, a * a)


def test_zip_builtin_callable_uses_promotion():
    a = np.arange(4, dtype=np.int64)
    cursor = zip_arrays(a, a, operator.add)
    assert cursor.value_type == from_numpy_dtype(np.int64)
    assert list(cursor) == [0, 2, 4, 6]


def produced_types(cursor_factory):
    """Types of the values from single-step and bulk traversal."""
    cursor = cursor_factory()
    out = []
    cursor.try_advance(out.append)
    cursor.drain_remaining(out.append)
    return {type(x) for x in out}


def test_zip_values_match_inferred_type():
    a = np.arange(5, dtype=np.int32)
    cursor = zip_arrays(a, a, lambda x, y: x + y)
    assert cursor.value_type == from_numpy_dtype(np.int64)
    assert produced_types(lambda: zip_arrays(a, a, lambda x, y: x + y)) == {np.int64}


def test_zip_values_match_declared_type():
    a = np.arange(5, dtype=np.int64)
    op = Op(lambda x, y: x * y, result_type=np.float64)
    assert produced_types(lambda: zip_arrays(a, a, op)) == {np.float64}
    np.testing.assert_array_equal(to_array(zip_arrays(a, a, op)), (a * a).astype(np.float64))


def test_zip_string_results():
    def label(a, b):
        return "larger" if a > b else "smaller"

    first = np.array([3, 1, 2], dtype=np.int32)
    second = np.array([1, 2, 3], dtype=np.int32)
    cursor = zip_arrays(first, second, label)
    assert cursor.value_type == from_numpy_dtype(object)
    assert not cursor.has_characteristics(Characteristics.NONNULL)

    result = to_array(zip_arrays(first, second, label))
    assert result.dtype == object
    assert list(result) == ["larger", "smaller", "smaller"]


def test_zip_widens_python_lists():
    cursor = zip_arrays([1, 2], [3, 4], lambda a, b: a + b, dtype=np.float64)
    assert cursor.value_type == from_numpy_dtype(np.float64)
    assert list(cursor) == [4.0, 6.0]
