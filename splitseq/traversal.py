# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Sequential traversal helpers.

These drive cursors the way a divide-and-conquer executor does, without any
threads: split recursively, then drain the leaves in encounter order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import numpy as np

from ._types import as_type_descriptor
from .cursors._base import check_visitor
from .cursors._protocol import UNKNOWN_SIZE, Visitor

if TYPE_CHECKING:
    from .cursors._protocol import CursorProtocol


def split_to_leaves(
    cursor: CursorProtocol, min_size: int = 1, max_depth: int = 64
) -> List[CursorProtocol]:
    """
    Recursively split ``cursor`` and return the leaves in encounter order.

    A cursor is not split further once its estimated size is at most
    ``min_size``, once ``max_depth`` splits deep, or when try_split()
    declines. Cursors of unknown size are always offered a split, since
    splitting is how they learn their size.

    Args:
        cursor: The cursor to split; it becomes the last leaf
        min_size: Size at or below which a cursor is a leaf
        max_depth: Maximum recursion depth

    Returns:
        List of cursors covering the input range, earliest first
    """
    if min_size < 1:
        raise ValueError(f"min_size must be positive, got {min_size}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    leaves: List[CursorProtocol] = []
    # explicit stack of (cursor, depth); later halves are pushed first
    stack = [(cursor, 0)]
    while stack:
        current, depth = stack.pop()
        size = current.estimate_size()
        if depth < max_depth and (size == UNKNOWN_SIZE or size > min_size):
            prefix = current.try_split()
            if prefix is not None:
                stack.append((current, depth + 1))
                stack.append((prefix, depth + 1))
                continue
        leaves.append(current)
    return leaves


def traverse_leaves(
    cursor: CursorProtocol, visit: Visitor, min_size: int = 1, max_depth: int = 64
) -> int:
    """
    Split ``cursor`` into leaves and drain each in order.

    Returns:
        The number of leaves drained
    """
    check_visitor(visit)
    leaves = split_to_leaves(cursor, min_size, max_depth)
    for leaf in leaves:
        leaf.drain_remaining(visit)
    return len(leaves)


def to_list(cursor: CursorProtocol) -> list:
    """Drain ``cursor`` into a list."""
    out: list = []
    cursor.drain_remaining(out.append)
    return out


def to_array(cursor: CursorProtocol, dtype=None) -> np.ndarray:
    """
    Drain ``cursor`` into a one-dimensional numpy array.

    The array is preallocated when the cursor knows its exact size.

    Args:
        cursor: The cursor to drain
        dtype: Element type of the result (default: the cursor's value type)
    """
    type_desc = as_type_descriptor(dtype) or cursor.value_type
    size = cursor.exact_size_if_known()
    if size < 0:
        values = to_list(cursor)
        if type_desc.dtype.kind != "O":
            return np.array(values, dtype=type_desc.dtype)
        out = np.empty(len(values), dtype=object)
        for i, value in enumerate(values):
            out[i] = value
        return out

    out = np.empty(size, dtype=type_desc.dtype)
    index = 0

    def store(value):
        nonlocal index
        out[index] = value
        index += 1

    cursor.drain_remaining(store)
    if index != size:
        raise RuntimeError(
            f"{type(cursor).__name__} reported size {size} but produced {index} elements"
        )
    return out
