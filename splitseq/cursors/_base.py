# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Base class for cursors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from ._protocol import Characteristics, Visitor

if TYPE_CHECKING:
    from .._types import TypeDescriptor


def check_visitor(visit: Visitor) -> None:
    """Reject a visitor that cannot be called, before any element is consumed."""
    if not callable(visit):
        raise TypeError(f"visitor must be callable, got {type(visit).__name__}")


def check_range(length: int, start: int, end: int) -> None:
    """Validate ``0 <= start <= end <= length``."""
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    if end < start:
        raise ValueError(f"end ({end}) must not be less than start ({start})")
    if end > length:
        raise ValueError(f"end ({end}) exceeds the source length ({length})")


class CursorBase:
    """
    Base class for cursors.

    Subclasses must implement:
    - try_split() -> CursorBase | None
    - try_advance(visit) -> bool
    - drain_remaining(visit) -> None
    - estimate_size() -> int
    - characteristics() -> Characteristics

    The base class provides the derived queries and Python iteration.
    """

    __slots__ = ["_value_type"]

    def __init__(self, value_type: TypeDescriptor):
        self._value_type = value_type

    @property
    def value_type(self) -> TypeDescriptor:
        """Return the TypeDescriptor for produced values."""
        return self._value_type

    def has_characteristics(self, flags: Characteristics) -> bool:
        """Return True if all of ``flags`` are reported."""
        return (self.characteristics() & flags) == flags

    def exact_size_if_known(self) -> int:
        """Return estimate_size() if this cursor is SIZED, else -1."""
        if self.has_characteristics(Characteristics.SIZED):
            return self.estimate_size()
        return -1

    def __iter__(self) -> Iterator:
        holder = []
        while self.try_advance(holder.append):
            yield holder.pop()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(value_type={self._value_type.name}, "
            f"estimate={self.estimate_size()})"
        )

    # Abstract methods for subclasses
    def try_split(self) -> Optional[CursorBase]:
        """Split off a cursor for the earlier part of the remaining range."""
        raise NotImplementedError

    def try_advance(self, visit: Visitor) -> bool:
        """Visit the next element; return False if none remain."""
        raise NotImplementedError

    def drain_remaining(self, visit: Visitor) -> None:
        """Visit all remaining elements in order."""
        raise NotImplementedError

    def estimate_size(self) -> int:
        """Return the (possibly estimated) number of remaining elements."""
        raise NotImplementedError

    def characteristics(self) -> Characteristics:
        """Return the traversal properties of this cursor."""
        raise NotImplementedError
