# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""ZipCursor implementation."""

from __future__ import annotations

from typing import Optional

from .._types import as_type_descriptor, from_numpy_dtype, scalar_converter
from ..op import make_op_adapter, resolve_result_type
from ._base import check_range
from ._protocol import Visitor
from ._range import RangeCursorBase, source_buffer, widening_converter


class ZipCursor(RangeCursorBase):
    """
    Cursor that walks two equal-length sources in lock-step.

    At each position, produces ``op(first[i], second[i])``, converted to the
    cursor's ``value_type`` when that is numeric. With ``value_type`` set,
    values of either source are widened exactly to that type before ``op``
    runs.
    """

    __slots__ = [
        "_first",
        "_second",
        "_func",
        "_convert_first",
        "_convert_second",
        "_convert_result",
    ]

    def __init__(
        self,
        first,
        second,
        op,
        start: int = 0,
        end: Optional[int] = None,
        *,
        value_type=None,
        result_type=None,
    ):
        """
        Create a zip cursor.

        Args:
            first: First fixed-length source
            second: Second fixed-length source
            op: Binary combiner (callable, Op or OpKind)
            start: First index to cover, inclusive
            end: Index past the last one to cover (default: source length)
            value_type: Optional width both sources are widened to
            result_type: Width of produced values (inferred when omitted)
        """
        target = as_type_descriptor(value_type)
        first = source_buffer(first, target)
        second = source_buffer(second, target)
        if len(first) != len(second):
            raise ValueError(
                f"Source lengths differ: {len(first)} != {len(second)}"
            )
        if end is None:
            end = len(first)
        check_range(len(first), start, end)

        op = make_op_adapter(op)
        self._first = first
        self._second = second
        self._func = op.func
        self._convert_first = widening_converter(first, target)
        self._convert_second = widening_converter(second, target)

        result_type = as_type_descriptor(result_type)
        if result_type is None:
            arg_types = (
                target or from_numpy_dtype(first.dtype),
                target or from_numpy_dtype(second.dtype),
            )
            result_type = resolve_result_type(op, arg_types)
        super().__init__(start, end, result_type)
        self._convert_result = scalar_converter(result_type)

    def _get(self, i: int):
        a = self._first[i]
        b = self._second[i]
        if self._convert_first is not None:
            a = self._convert_first(a)
        if self._convert_second is not None:
            b = self._convert_second(b)
        result = self._func(a, b)
        if self._convert_result is not None:
            return self._convert_result(result)
        return result

    def _drain_range(self, lo: int, hi: int, visit: Visitor) -> None:
        first = self._first[lo:hi]
        second = self._second[lo:hi]
        if self._convert_first is not None:
            first = first.astype(self._convert_first)
        if self._convert_second is not None:
            second = second.astype(self._convert_second)
        func = self._func
        convert = self._convert_result
        if convert is None:
            for a, b in zip(first, second):
                visit(func(a, b))
        else:
            for a, b in zip(first, second):
                visit(convert(func(a, b)))
