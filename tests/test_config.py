# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Tests for batch tuning configuration.
"""

import os
from unittest.mock import patch

import pytest

from splitseq import from_iterator
from splitseq._config import (
    BATCH_UNIT,
    BATCH_UNIT_ENV,
    MAX_BATCH,
    MAX_BATCH_ENV,
    get_batch_limits,
)


class TestBatchLimits:
    """Test resolution of batch limits."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        assert get_batch_limits() == (BATCH_UNIT, MAX_BATCH)
        assert BATCH_UNIT == 1024
        assert MAX_BATCH == 1 << 25

    @patch.dict(os.environ, {BATCH_UNIT_ENV: "8", MAX_BATCH_ENV: "32"})
    def test_environment_overrides(self):
        assert get_batch_limits() == (8, 32)

    @patch.dict(os.environ, {BATCH_UNIT_ENV: "8", MAX_BATCH_ENV: "32"})
    def test_arguments_win_over_environment(self):
        assert get_batch_limits(batch_unit=2, max_batch=4) == (2, 4)

    @patch.dict(os.environ, {BATCH_UNIT_ENV: "lots"})
    def test_invalid_environment_value(self):
        with pytest.raises(ValueError, match=BATCH_UNIT_ENV):
            get_batch_limits()

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            get_batch_limits(batch_unit=0, max_batch=10)
        with pytest.raises(ValueError):
            get_batch_limits(batch_unit=10, max_batch=5)

    @patch.dict(os.environ, {BATCH_UNIT_ENV: "3", MAX_BATCH_ENV: "3"})
    def test_cursor_reads_environment(self):
        cursor = from_iterator(iter(range(10)))
        assert cursor.try_split().estimate_size() == 3
        assert cursor.try_split().estimate_size() == 3
