# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Tuning constants for batch allocation when splitting pull sources.
"""

import os
from typing import Optional, Tuple

# batch array size increment
BATCH_UNIT = 1 << 10
# max batch array size
MAX_BATCH = 1 << 25

BATCH_UNIT_ENV = "SPLITSEQ_BATCH_UNIT"
MAX_BATCH_ENV = "SPLITSEQ_MAX_BATCH"


def _read_env_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def validate_batch_limits(batch_unit: int, max_batch: int) -> None:
    """Validate that the batch limits describe a usable growth schedule."""
    if batch_unit < 1:
        raise ValueError(f"batch_unit must be positive, got {batch_unit}")
    if max_batch < batch_unit:
        raise ValueError(
            f"max_batch ({max_batch}) must not be smaller than "
            f"batch_unit ({batch_unit})"
        )


def get_batch_limits(
    batch_unit: Optional[int] = None, max_batch: Optional[int] = None
) -> Tuple[int, int]:
    """
    Resolve the (batch_unit, max_batch) pair.

    Explicit arguments win, then the SPLITSEQ_BATCH_UNIT and
    SPLITSEQ_MAX_BATCH environment variables, then the module defaults.
    """
    if batch_unit is None:
        batch_unit = _read_env_int(BATCH_UNIT_ENV)
        if batch_unit is None:
            batch_unit = BATCH_UNIT

    if max_batch is None:
        max_batch = _read_env_int(MAX_BATCH_ENV)
        if max_batch is None:
            max_batch = MAX_BATCH

    validate_batch_limits(batch_unit, max_batch)
    return batch_unit, max_batch
