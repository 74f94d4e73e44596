# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Cursor over a pull source of unknown length.

The cursor starts out wrapping the live source. Each split drains a batch of
elements into a read-only numpy buffer that is handed to the new sibling;
batch sizes grow by a fixed unit per split up to a ceiling. Once the source
runs dry during a split, the cursor keeps the partial batch as its own
storage and from then on splits by index arithmetic.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .._config import get_batch_limits
from .._types import TypeDescriptor, as_type_descriptor, object_
from ._base import CursorBase, check_range, check_visitor
from ._protocol import UNKNOWN_SIZE, Characteristics, Visitor

_EMPTY = object()


class PullSource:
    """
    Adapts a Python iterable to a two-step pull protocol.

    ``has_next()`` and ``next()`` are independent operations: ``has_next()``
    pulls at most one element ahead and keeps it until ``next()`` hands it
    out.
    """

    __slots__ = ["_iterator", "_lookahead"]

    def __init__(self, iterable: Iterable):
        self._iterator = iter(iterable)
        self._lookahead = _EMPTY

    def has_next(self) -> bool:
        if self._lookahead is _EMPTY:
            self._lookahead = next(self._iterator, _EMPTY)
        return self._lookahead is not _EMPTY

    def next(self):
        if not self.has_next():
            raise StopIteration
        value = self._lookahead
        self._lookahead = _EMPTY
        return value

    def for_each_remaining(self, visit: Visitor) -> None:
        """Visit every remaining element of the source."""
        if self._lookahead is not _EMPTY:
            value = self._lookahead
            self._lookahead = _EMPTY
            visit(value)
        for value in self._iterator:
            visit(value)

    def __iter__(self):
        return self

    def __next__(self):
        return self.next()


def as_buffer(values, value_type: TypeDescriptor | None = None) -> np.ndarray:
    """
    Return ``values`` as a one-dimensional numpy buffer.

    numpy arrays are used as-is when no conversion is requested. Other
    sequences become an object buffer unless a numeric ``value_type`` is
    given.
    """
    if isinstance(values, np.ndarray):
        if value_type is not None and values.dtype != value_type.dtype:
            values = values.astype(value_type.dtype)
        if values.ndim != 1:
            raise ValueError(f"buffer must be one-dimensional, got {values.ndim}")
        return values

    if value_type is not None and value_type.dtype.kind != "O":
        return np.asarray(values, dtype=value_type.dtype)

    values = list(values)
    buffer = np.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        buffer[i] = value
    return buffer


def _read_only(buffer: np.ndarray) -> np.ndarray:
    buffer.flags.writeable = False
    return buffer


def _fill_batch(source: PullSource, n: int, value_type: TypeDescriptor):
    """Pull up to ``n`` elements into a new buffer; return (buffer, count)."""
    buffer = np.empty(n, dtype=value_type.dtype)
    count = 0
    while count < n and source.has_next():
        buffer[count] = source.next()
        count += 1
    return _read_only(buffer), count


class _LiveState:
    """The cursor still owns the pull source."""

    __slots__ = ["source", "batch"]

    def __init__(self, source: PullSource):
        self.source = source
        # size of the last batch handed out
        self.batch = 0


class _BufferedState:
    """The cursor addresses ``buffer[index:fence]``."""

    __slots__ = ["buffer", "index", "fence"]

    def __init__(self, buffer: np.ndarray, index: int, fence: int):
        self.buffer = buffer
        self.index = index
        self.fence = fence


class BatchGrowthCursor(CursorBase):
    """
    Splittable cursor over a pull source of unknown length.

    Example:
        >>> from splitseq import BatchGrowthCursor
        >>> cursor = BatchGrowthCursor(iter(range(9)))
        >>> prefix = cursor.try_split()
        >>> prefix.estimate_size(), cursor.estimate_size()
        (4, 5)
    """

    __slots__ = ["_state", "_batch_unit", "_max_batch"]

    def __init__(
        self,
        source: Iterable,
        value_type=None,
        *,
        batch_unit: Optional[int] = None,
        max_batch: Optional[int] = None,
    ):
        """
        Create a cursor that pulls from ``source``.

        Args:
            source: Any iterable, or a PullSource
            value_type: Element width of the batch buffers (default: object)
            batch_unit: Batch size increment (default from configuration)
            max_batch: Batch size ceiling (default from configuration)
        """
        value_type = as_type_descriptor(value_type) or object_
        super().__init__(value_type)
        if not isinstance(source, PullSource):
            source = PullSource(source)
        self._state = _LiveState(source)
        self._batch_unit, self._max_batch = get_batch_limits(batch_unit, max_batch)

    @classmethod
    def from_buffer(
        cls,
        buffer,
        index: int = 0,
        fence: Optional[int] = None,
        *,
        batch_unit: Optional[int] = None,
        max_batch: Optional[int] = None,
    ) -> BatchGrowthCursor:
        """Create a cursor over ``buffer[index:fence]``."""
        buffer = as_buffer(buffer)
        if fence is None:
            fence = len(buffer)
        check_range(len(buffer), index, fence)
        batch_unit, max_batch = get_batch_limits(batch_unit, max_batch)
        return cls._buffered(
            buffer, index, fence, as_type_descriptor(buffer.dtype), batch_unit, max_batch
        )

    @classmethod
    def _buffered(cls, buffer, index, fence, value_type, batch_unit, max_batch):
        cursor = cls.__new__(cls)
        CursorBase.__init__(cursor, value_type)
        cursor._state = _BufferedState(buffer, index, fence)
        cursor._batch_unit = batch_unit
        cursor._max_batch = max_batch
        return cursor

    def _sibling(self, buffer: np.ndarray, index: int, fence: int):
        return self._buffered(
            buffer, index, fence, self._value_type, self._batch_unit, self._max_batch
        )

    def _exhaust(self) -> None:
        empty = _read_only(np.empty(0, dtype=self._value_type.dtype))
        self._state = _BufferedState(empty, 0, 0)

    @property
    def is_buffered(self) -> bool:
        """True once the cursor no longer wraps the live source."""
        return isinstance(self._state, _BufferedState)

    def try_split(self) -> Optional[BatchGrowthCursor]:
        state = self._state
        if isinstance(state, _LiveState):
            source = state.source
            if not source.has_next():
                self._exhaust()
                return None
            n = min(state.batch + self._batch_unit, self._max_batch)
            buffer, count = _fill_batch(source, n, self._value_type)
            if source.has_next():
                state.batch = count
                return self._sibling(buffer, 0, count)
            state = self._state = _BufferedState(buffer, 0, count)

        lo = state.index
        mid = (lo + state.fence) >> 1
        if lo >= mid:
            return None
        state.index = mid
        return self._sibling(state.buffer, lo, mid)

    def try_advance(self, visit: Visitor) -> bool:
        check_visitor(visit)
        state = self._state
        if isinstance(state, _LiveState):
            if state.source.has_next():
                visit(self._value_type.scalar(state.source.next()))
                return True
            self._exhaust()
            return False

        if state.index < state.fence:
            value = state.buffer[state.index]
            state.index += 1
            visit(value)
            return True
        return False

    def drain_remaining(self, visit: Visitor) -> None:
        check_visitor(visit)
        state = self._state
        if isinstance(state, _LiveState):
            if self._value_type.dtype.kind == "O":
                state.source.for_each_remaining(visit)
            else:
                scalar = self._value_type.scalar
                state.source.for_each_remaining(lambda value: visit(scalar(value)))
            self._exhaust()
            return

        buffer = state.buffer
        # advance before visiting; a later drain resumes after a raising visitor
        while state.index < state.fence:
            value = buffer[state.index]
            state.index += 1
            visit(value)

    def estimate_size(self) -> int:
        state = self._state
        if isinstance(state, _LiveState):
            return UNKNOWN_SIZE
        return state.fence - state.index

    def characteristics(self) -> Characteristics:
        if isinstance(self._state, _LiveState):
            return Characteristics.ORDERED
        return Characteristics.ORDERED | Characteristics.SIZED | Characteristics.SUBSIZED
