# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Cursor protocol for splitseq.

Defines the interface that all cursors must implement to be traversed by a
divide-and-conquer executor.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .._types import TypeDescriptor

# Reported by estimate_size() when the remaining count is unknown
UNKNOWN_SIZE = (1 << 63) - 1

Visitor = Callable[[Any], None]


class Characteristics(enum.IntFlag):
    """Traversal properties a cursor reports to its consumer."""

    NONE = 0
    # Encounter order is significant
    ORDERED = 0x10
    # estimate_size() is exact
    SIZED = 0x40
    # Both halves of any split are SIZED
    SUBSIZED = 0x4000
    # The source cannot change during traversal
    IMMUTABLE = 0x400
    # No produced value is None
    NONNULL = 0x100


@runtime_checkable
class CursorProtocol(Protocol):
    """
    Protocol defining the interface for splittable cursors.

    A cursor is owned by exactly one executor task at a time. A successful
    try_split() hands the earlier part of the remaining range to the returned
    cursor; afterwards the two cursors are independent.
    """

    @property
    def value_type(self) -> TypeDescriptor:
        """Return the TypeDescriptor for produced values."""
        ...

    def try_split(self) -> Optional[CursorProtocol]:
        """
        Split off a cursor covering the earlier part of the remaining range.

        Returns:
            The new cursor, or None if this cursor cannot be split
        """
        ...

    def try_advance(self, visit: Visitor) -> bool:
        """
        Visit the next element, if any.

        Returns:
            True if an element was visited, False if none remain
        """
        ...

    def drain_remaining(self, visit: Visitor) -> None:
        """Visit every remaining element in encounter order."""
        ...

    def estimate_size(self) -> int:
        """
        Return the number of remaining elements.

        Exact when the cursor reports SIZED; UNKNOWN_SIZE when unknown.
        """
        ...

    def characteristics(self) -> Characteristics:
        """Return the traversal properties of this cursor."""
        ...

    def exact_size_if_known(self) -> int:
        """Return estimate_size() when the cursor is SIZED, else -1."""
        ...
