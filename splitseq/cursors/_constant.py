# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""ConstantCursor implementation."""

from __future__ import annotations

from typing import Optional

from .._types import as_type_descriptor, type_of_value
from ._base import CursorBase, check_visitor
from ._protocol import Characteristics, Visitor


class ConstantCursor(CursorBase):
    """
    Cursor over a single value repeated a known number of times.

    Every element is the same value, so the cursor does not report ORDERED.
    """

    __slots__ = ["_value", "_remaining"]

    def __init__(self, value, count: int, value_type=None):
        """
        Create a constant cursor.

        Args:
            value: The repeated value
            count: Number of repetitions (non-negative)
            value_type: Optional element width the value is converted to
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        value_type = as_type_descriptor(value_type)
        if value_type is not None:
            value = value_type.scalar(value)
        else:
            value_type = type_of_value(value)

        super().__init__(value_type)
        self._value = value
        self._remaining = int(count)

    @property
    def value(self):
        return self._value

    def try_split(self) -> Optional[ConstantCursor]:
        remaining = self._remaining
        if remaining < 2:
            return None
        half = remaining >> 1
        self._remaining = remaining - half
        return ConstantCursor(self._value, half, self._value_type)

    def try_advance(self, visit: Visitor) -> bool:
        check_visitor(visit)
        if self._remaining <= 0:
            return False
        self._remaining -= 1
        visit(self._value)
        return True

    def drain_remaining(self, visit: Visitor) -> None:
        check_visitor(visit)
        value = self._value
        while self._remaining > 0:
            self._remaining -= 1
            visit(value)

    def estimate_size(self) -> int:
        return self._remaining

    def characteristics(self) -> Characteristics:
        flags = Characteristics.SIZED | Characteristics.SUBSIZED | Characteristics.IMMUTABLE
        if self._value is not None:
            flags |= Characteristics.NONNULL
        return flags
