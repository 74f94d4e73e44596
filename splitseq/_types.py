# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Element type descriptors for splitseq.

This module provides TypeDescriptor, a lightweight representation of the
element width a cursor produces. Cursors over numeric data keep their values
in numpy buffers of the described dtype; cursors over arbitrary Python
objects use the ``object_`` descriptor.
"""

from __future__ import annotations

import functools

import numpy as np


class TypeDescriptor:
    """
    A type descriptor that wraps a numpy dtype.

    Attributes:
        dtype: The numpy dtype of produced values
        size: Size of one element in bytes
        alignment: Alignment of one element in bytes
        name: Human-readable name for debugging
    """

    __slots__ = ("dtype", "size", "alignment", "name")

    def __init__(self, dtype: np.dtype, name: str | None = None):
        dtype = np.dtype(dtype)
        self.dtype = dtype
        self.size = dtype.itemsize
        self.alignment = dtype.alignment
        self.name = name if name is not None else dtype.name

    @property
    def is_numeric(self) -> bool:
        """Return True for integer, unsigned, floating and boolean widths."""
        return self.dtype.kind in "biuf"

    def scalar(self, value):
        """Convert ``value`` to a scalar of this width."""
        if self.dtype.kind == "O":
            return value
        return self.dtype.type(value)

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.name})"

    def __eq__(self, other) -> bool:
        if isinstance(other, TypeDescriptor):
            return self.dtype == other.dtype
        return False

    def __hash__(self) -> int:
        return hash(self.dtype)


# =============================================================================
# Standard type descriptors
# =============================================================================

# Signed integer types
int8 = TypeDescriptor(np.int8)
int16 = TypeDescriptor(np.int16)
int32 = TypeDescriptor(np.int32)
int64 = TypeDescriptor(np.int64)

# Unsigned integer types
uint8 = TypeDescriptor(np.uint8)
uint16 = TypeDescriptor(np.uint16)
uint32 = TypeDescriptor(np.uint32)
uint64 = TypeDescriptor(np.uint64)

# Floating point types
float16 = TypeDescriptor(np.float16)
float32 = TypeDescriptor(np.float32)
float64 = TypeDescriptor(np.float64)

# Boolean
boolean = TypeDescriptor(np.bool_, "bool")

# Arbitrary Python objects
object_ = TypeDescriptor(np.object_, "object")

# Mapping from numpy dtype to pre-defined TypeDescriptor
_NUMPY_DTYPE_TO_DESCRIPTOR = {
    td.dtype: td
    for td in (
        int8,
        int16,
        int32,
        int64,
        uint8,
        uint16,
        uint32,
        uint64,
        float16,
        float32,
        float64,
        boolean,
        object_,
    )
}


@functools.lru_cache(maxsize=256)
def from_numpy_dtype(dtype: np.dtype) -> TypeDescriptor:
    """
    Create a TypeDescriptor from a numpy dtype.

    Args:
        dtype: A numpy dtype (or anything ``np.dtype`` accepts)

    Returns:
        A TypeDescriptor for the dtype

    Example:
        from splitseq._types import from_numpy_dtype
        import numpy as np

        int_type = from_numpy_dtype(np.dtype('int32'))
    """
    dtype = np.dtype(dtype)  # Ensure it's a dtype object

    if dtype in _NUMPY_DTYPE_TO_DESCRIPTOR:
        return _NUMPY_DTYPE_TO_DESCRIPTOR[dtype]

    return TypeDescriptor(dtype)


def as_type_descriptor(dtype) -> TypeDescriptor | None:
    """Normalize a dtype-like argument, passing TypeDescriptor and None through."""
    if dtype is None or isinstance(dtype, TypeDescriptor):
        return dtype
    return from_numpy_dtype(dtype)


def type_of_value(value) -> TypeDescriptor:
    """Return the descriptor for a single value; non-numpy values are objects."""
    if isinstance(value, np.generic):
        return from_numpy_dtype(value.dtype)
    return object_


def check_widening(source: TypeDescriptor, target: TypeDescriptor) -> None:
    """Raise TypeError unless every ``source`` value is exactly representable in ``target``."""
    if not np.can_cast(source.dtype, target.dtype, casting="safe"):
        raise TypeError(
            f"Cannot widen {source.name} values to {target.name} without loss"
        )


def scalar_converter(type_desc: TypeDescriptor):
    """Return the scalar type values are converted with, or None for objects."""
    if type_desc.dtype.kind == "O":
        return None
    return type_desc.dtype.type


def result_type(*arg_types: TypeDescriptor) -> TypeDescriptor:
    """Return the numpy promotion of ``arg_types``."""
    return from_numpy_dtype(np.result_type(*(t.dtype for t in arg_types)))
