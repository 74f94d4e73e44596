# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Factory functions for cursors.

These provide the user-facing construction API, accepting Python iterables,
numpy arrays or plain sequences, and Python callables, Op or OpKind
combiners.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

from .._types import as_type_descriptor
from ..op import Op, OpKind
from ._batch import BatchGrowthCursor
from ._constant import ConstantCursor
from ._pair import PairWindowCursor
from ._range import ArrayCursor
from ._zip import ZipCursor

if TYPE_CHECKING:
    import numpy as np

    from ._protocol import CursorProtocol

Combiner = Union[Callable, Op, OpKind]


def from_iterator(
    iterable: Iterable,
    dtype=None,
    *,
    batch_unit: Optional[int] = None,
    max_batch: Optional[int] = None,
) -> BatchGrowthCursor:
    """
    Create a cursor over a pull source of unknown length.

    Args:
        iterable: Any iterable; it is consumed lazily
        dtype: Element width of the batch buffers (default: Python objects)
        batch_unit: Batch size increment (default from configuration)
        max_batch: Batch size ceiling (default from configuration)

    Returns:
        BatchGrowthCursor in live mode
    """
    return BatchGrowthCursor(
        iterable,
        as_type_descriptor(dtype),
        batch_unit=batch_unit,
        max_batch=max_batch,
    )


def from_buffer(
    buffer: Union["np.ndarray", Iterable],
    start: int = 0,
    end: Optional[int] = None,
) -> BatchGrowthCursor:
    """Create an already-buffered cursor over ``buffer[start:end]``."""
    return BatchGrowthCursor.from_buffer(buffer, start, end)


def from_array(
    array: Union["np.ndarray", Iterable],
    start: int = 0,
    end: Optional[int] = None,
    dtype=None,
) -> ArrayCursor:
    """
    Create a cursor over ``array[start:end]``.

    Args:
        array: Fixed-length source, assumed unmodified during use
        start: First index to cover, inclusive
        end: Index past the last one to cover (default: array length)
        dtype: Optional wider type each element is converted to

    Returns:
        ArrayCursor

    Raises:
        ValueError: if the range is negative, inverted or out of bounds
        TypeError: if ``dtype`` cannot hold every value of the array exactly
    """
    return ArrayCursor(array, start, end, dtype)


def constant(value, count: int, dtype=None) -> ConstantCursor:
    """
    Create an unordered cursor over ``count`` copies of ``value``.

    Args:
        value: The repeated value
        count: Number of copies (non-negative)
        dtype: Optional width the value is converted to
    """
    return ConstantCursor(value, count, dtype)


def zip_arrays(first, second, op: Combiner, dtype=None) -> ZipCursor:
    """
    Create a cursor over ``op(first[i], second[i])``.

    Args:
        first: First fixed-length source
        second: Second fixed-length source
        op: Binary combiner (Python callable, Op or OpKind)
        dtype: Optional wider type both sources are converted to

    Raises:
        ValueError: if the sources have different lengths
    """
    return ZipCursor(first, second, op, value_type=dtype)


def pair_map(cursor: "CursorProtocol", op: Combiner) -> PairWindowCursor:
    """
    Create a cursor over ``op(x[i], x[i + 1])`` for adjacent elements of ``cursor``.

    The new cursor takes ownership of ``cursor``.
    """
    return PairWindowCursor(cursor, op)
