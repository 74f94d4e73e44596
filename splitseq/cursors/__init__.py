# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Splittable cursor implementations.

This package provides the cursor families a divide-and-conquer executor
splits, sizes and drains.
"""

from ._base import CursorBase
from ._batch import BatchGrowthCursor, PullSource
from ._constant import ConstantCursor
from ._factories import (
    constant,
    from_array,
    from_buffer,
    from_iterator,
    pair_map,
    zip_arrays,
)
from ._pair import PairState, PairWindowCursor
from ._protocol import UNKNOWN_SIZE, Characteristics, CursorProtocol
from ._range import ArrayCursor, RangeCursorBase
from ._zip import ZipCursor

__all__ = [
    "ArrayCursor",
    "BatchGrowthCursor",
    "Characteristics",
    "ConstantCursor",
    "CursorBase",
    "CursorProtocol",
    "PairState",
    "PairWindowCursor",
    "PullSource",
    "RangeCursorBase",
    "UNKNOWN_SIZE",
    "ZipCursor",
    "constant",
    "from_array",
    "from_buffer",
    "from_iterator",
    "pair_map",
    "zip_arrays",
]
