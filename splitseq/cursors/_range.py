# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Cursors over index ranges of fixed-length, randomly addressable sources.
"""

from __future__ import annotations

import copy
from typing import Optional

import numpy as np

from .._types import (
    TypeDescriptor,
    as_type_descriptor,
    check_widening,
    from_numpy_dtype,
)
from ._base import CursorBase, check_range, check_visitor
from ._batch import as_buffer
from ._protocol import Characteristics, Visitor


class RangeCursorBase(CursorBase):
    """
    Base class for cursors over ``[start, end)`` of fixed sources.

    Splitting is pure index arithmetic. Subclasses must implement:
    - _get(i) -> value at index ``i``
    - _drain_range(lo, hi, visit) -> None
    """

    __slots__ = ["_start", "_end"]

    def __init__(self, start: int, end: int, value_type: TypeDescriptor):
        super().__init__(value_type)
        self._start = start
        self._end = end

    def _split_off(self, lo: int, hi: int) -> RangeCursorBase:
        # sources are shared by reference with the sibling
        sibling = copy.copy(self)
        sibling._start = lo
        sibling._end = hi
        return sibling

    def try_split(self) -> Optional[RangeCursorBase]:
        lo = self._start
        mid = (lo + self._end) >> 1
        if lo >= mid:
            return None
        self._start = mid
        return self._split_off(lo, mid)

    def try_advance(self, visit: Visitor) -> bool:
        check_visitor(visit)
        i = self._start
        if i >= self._end:
            return False
        self._start = i + 1
        visit(self._get(i))
        return True

    def drain_remaining(self, visit: Visitor) -> None:
        check_visitor(visit)
        lo, hi = self._start, self._end
        if lo >= hi:
            return

        def step(value):
            # advance before visiting; a later drain resumes after a raising visitor
            self._start += 1
            visit(value)

        self._drain_range(lo, hi, step)

    def estimate_size(self) -> int:
        return self._end - self._start

    def characteristics(self) -> Characteristics:
        flags = (
            Characteristics.ORDERED
            | Characteristics.SIZED
            | Characteristics.SUBSIZED
            | Characteristics.IMMUTABLE
        )
        if self._value_type.dtype.kind != "O":
            flags |= Characteristics.NONNULL
        return flags

    # Abstract methods for subclasses
    def _get(self, i: int):
        raise NotImplementedError

    def _drain_range(self, lo: int, hi: int, visit: Visitor) -> None:
        raise NotImplementedError


def source_buffer(values, target: TypeDescriptor | None) -> np.ndarray:
    """
    Return ``values`` as a one-dimensional buffer for reading as ``target``.

    Sequences feeding a numeric target keep the dtype numpy infers for them,
    so that widening is checked against that dtype rather than ``object``.
    """
    if target is not None and target.is_numeric and not isinstance(values, np.ndarray):
        values = np.asarray(values)
        if values.size == 0:
            values = values.astype(target.dtype)
    return as_buffer(values)


def widening_converter(array: np.ndarray, target: TypeDescriptor | None):
    """Return the scalar converter for reading ``array`` as ``target``, or None."""
    if target is None or array.dtype == target.dtype:
        return None
    check_widening(from_numpy_dtype(array.dtype), target)
    return target.dtype.type


class ArrayCursor(RangeCursorBase):
    """
    Cursor over ``array[start:end]``.

    With ``value_type`` set, each element is widened to that type as it is
    read (e.g. a float32 array feeding a float64 pipeline). Widening must be
    exact; a narrowing conversion is rejected at construction.
    """

    __slots__ = ["_array", "_convert"]

    def __init__(self, array, start: int = 0, end: Optional[int] = None, value_type=None):
        target = as_type_descriptor(value_type)
        array = source_buffer(array, target)
        if end is None:
            end = len(array)
        check_range(len(array), start, end)

        self._array = array
        self._convert = widening_converter(array, target)
        super().__init__(start, end, target or from_numpy_dtype(array.dtype))

    def _get(self, i: int):
        value = self._array[i]
        if self._convert is not None:
            return self._convert(value)
        return value

    def _drain_range(self, lo: int, hi: int, visit: Visitor) -> None:
        chunk = self._array[lo:hi]
        if self._convert is not None:
            chunk = chunk.astype(self._value_type.dtype)
        for value in chunk:
            visit(value)
