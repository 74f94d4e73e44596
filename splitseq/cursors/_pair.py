# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Cursor producing ``op(x[i], x[i + 1])`` over the elements of another cursor.

Splitting forwards to the inner cursor. The element right after the split
point (the boundary element) is needed by both halves: the earlier half
pairs its own last element with it, and the later half uses it as its first
"previous" value. It is pulled out of the later inner cursor once, during
the split, and handed to the earlier half as a trailing element.
"""

from __future__ import annotations

import enum
from typing import Optional

from .._types import as_type_descriptor, scalar_converter
from ..op import make_op_adapter, resolve_result_type
from ._base import CursorBase, check_visitor
from ._protocol import UNKNOWN_SIZE, Characteristics, CursorProtocol, Visitor

_NONE = object()

_INHERITED = (
    Characteristics.ORDERED
    | Characteristics.SIZED
    | Characteristics.SUBSIZED
    | Characteristics.IMMUTABLE
)


class PairState(enum.Enum):
    # No previous element yet; the next inner element is the seed
    UNSTARTED = "unstarted"
    # Holding the previous element; pairs are being produced
    ADVANCING = "advancing"
    # Holding the boundary element pulled during a split; nothing produced yet
    BOUNDARY_CONSUMED = "boundary_consumed"
    # Nothing left to produce
    EXHAUSTED = "exhausted"


class PairWindowCursor(CursorBase):
    """
    Cursor over adjacent pairs of an inner cursor.

    Produces one element less than the inner cursor (none for an inner
    cursor of length 0 or 1), in the inner cursor's encounter order,
    regardless of how it is split. Values are converted to ``value_type``
    when it is numeric.
    """

    __slots__ = ["_inner", "_op", "_func", "_convert", "_state", "_prev", "_trailing"]

    def __init__(self, inner: CursorProtocol, op, result_type=None):
        """
        Create a pair cursor.

        Args:
            inner: The cursor whose adjacent elements are combined
            op: Binary combiner (callable, Op or OpKind)
            result_type: Width of produced values (inferred when omitted)
        """
        op = make_op_adapter(op)
        result_type = as_type_descriptor(result_type)
        if result_type is None:
            inner_type = inner.value_type
            result_type = resolve_result_type(op, (inner_type, inner_type))
        super().__init__(result_type)
        self._inner = inner
        self._op = op
        self._func = op.func
        self._convert = scalar_converter(result_type)
        self._state = PairState.UNSTARTED
        self._prev = _NONE
        # first element of the range after ours, produced after the inner cursor
        self._trailing = _NONE

    @property
    def state(self) -> PairState:
        return self._state

    def _has_prev(self) -> bool:
        return self._state in (PairState.ADVANCING, PairState.BOUNDARY_CONSUMED)

    def _seed(self) -> bool:
        """UNSTARTED -> ADVANCING: consume one inner element without output."""
        holder = []
        if not self._inner.try_advance(holder.append):
            self._finish()
            return False
        self._prev = holder[0]
        self._state = PairState.ADVANCING
        return True

    def _finish(self) -> None:
        # a pending trailing element has no predecessor in our range
        self._state = PairState.EXHAUSTED
        self._prev = _NONE
        self._trailing = _NONE

    def try_split(self) -> Optional[PairWindowCursor]:
        if self._state is PairState.EXHAUSTED:
            return None
        prefix_inner = self._inner.try_split()
        if prefix_inner is None:
            return None

        holder = []
        if not self._inner.try_advance(holder.append):
            # the retained half was empty; keep going with the prefix
            self._inner = prefix_inner
            return None
        boundary = holder[0]

        prefix = PairWindowCursor(prefix_inner, self._op, self._value_type)
        if self._has_prev():
            prefix._state = PairState.ADVANCING
            prefix._prev = self._prev
        prefix._trailing = boundary

        self._prev = boundary
        self._state = PairState.BOUNDARY_CONSUMED
        return prefix

    def try_advance(self, visit: Visitor) -> bool:
        check_visitor(visit)
        if self._state is PairState.EXHAUSTED:
            return False
        if self._state is PairState.UNSTARTED and not self._seed():
            return False

        holder = []
        if self._inner.try_advance(holder.append):
            cur = holder[0]
        elif self._trailing is not _NONE:
            cur = self._trailing
            self._trailing = _NONE
        else:
            self._finish()
            return False

        prev = self._prev
        self._prev = cur
        self._state = PairState.ADVANCING
        result = self._func(prev, cur)
        if self._convert is not None:
            result = self._convert(result)
        visit(result)
        return True

    def drain_remaining(self, visit: Visitor) -> None:
        check_visitor(visit)
        if self._state is PairState.EXHAUSTED:
            return
        if self._state is PairState.UNSTARTED and not self._seed():
            return

        func = self._func
        convert = self._convert
        prev = self._prev

        def step(cur):
            nonlocal prev
            result = func(prev, cur)
            if convert is not None:
                result = convert(result)
            prev = cur
            visit(result)

        self._inner.drain_remaining(step)
        if self._trailing is not _NONE:
            step(self._trailing)
        self._finish()

    def estimate_size(self) -> int:
        if self._state is PairState.EXHAUSTED:
            return 0
        size = self._inner.estimate_size()
        if size == UNKNOWN_SIZE:
            return size
        if self._trailing is not _NONE:
            size += 1
        if self._state is PairState.UNSTARTED and size > 0:
            size -= 1
        return size

    def characteristics(self) -> Characteristics:
        return self._inner.characteristics() & _INHERITED
