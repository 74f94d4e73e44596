# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Splittable cursors for divide-and-conquer traversal.

Cursors adapt pull iterators, constants, arrays and pairs of arrays into
sources a fork/join style executor can split, size and drain, and compose
into pair windows over any other cursor.
"""

from ._types import TypeDescriptor, from_numpy_dtype
from .cursors import (
    UNKNOWN_SIZE,
    ArrayCursor,
    BatchGrowthCursor,
    Characteristics,
    ConstantCursor,
    CursorBase,
    CursorProtocol,
    PairState,
    PairWindowCursor,
    PullSource,
    ZipCursor,
    constant,
    from_array,
    from_buffer,
    from_iterator,
    pair_map,
    zip_arrays,
)
from .op import Op, OpKind
from .traversal import split_to_leaves, to_array, to_list, traverse_leaves

__version__ = "0.1.0"

__all__ = [
    "ArrayCursor",
    "BatchGrowthCursor",
    "Characteristics",
    "ConstantCursor",
    "CursorBase",
    "CursorProtocol",
    "Op",
    "OpKind",
    "PairState",
    "PairWindowCursor",
    "PullSource",
    "TypeDescriptor",
    "UNKNOWN_SIZE",
    "ZipCursor",
    "constant",
    "from_array",
    "from_buffer",
    "from_iterator",
    "from_numpy_dtype",
    "pair_map",
    "split_to_leaves",
    "to_array",
    "to_list",
    "traverse_leaves",
    "zip_arrays",
]
