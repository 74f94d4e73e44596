# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Binary combiners accepted by zip and pair cursors.
"""

from __future__ import annotations

import enum
import operator
from typing import Callable

from ._types import TypeDescriptor, as_type_descriptor, object_, result_type


class OpKind(enum.Enum):
    """Well-known binary combiners whose result width follows numpy promotion."""

    PLUS = "plus"
    MINUS = "minus"
    MULTIPLIES = "multiplies"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"


_OP_KIND_FUNCS = {
    OpKind.PLUS: operator.add,
    OpKind.MINUS: operator.sub,
    OpKind.MULTIPLIES: operator.mul,
    OpKind.MAXIMUM: max,
    OpKind.MINIMUM: min,
}


class Op:
    """
    Wraps a binary callable with an optional declared result type.

    When ``result_type`` is given, no inference is attempted: the cursors
    report it as their value type as-is.

    Example:
        >>> import numpy as np
        >>> from splitseq import Op, zip_arrays
        >>> op = Op(lambda a, b: a * b, result_type=np.float64)
        >>> cursor = zip_arrays(np.ones(3), np.ones(3), op)
    """

    __slots__ = ["_func", "_result_type", "_kind"]

    def __init__(
        self,
        func: Callable,
        result_type=None,
        kind: OpKind | None = None,
    ):
        if not callable(func):
            raise TypeError(f"op must be callable, got {type(func).__name__}")
        self._func = func
        self._result_type = as_type_descriptor(result_type)
        self._kind = kind

    @property
    def func(self) -> Callable:
        """Access the wrapped callable."""
        return self._func

    @property
    def result_type(self) -> TypeDescriptor | None:
        """The declared result type, or None when it must be inferred."""
        return self._result_type

    @property
    def kind(self) -> OpKind | None:
        return self._kind

    def __call__(self, a, b):
        return self._func(a, b)

    def __repr__(self) -> str:
        name = self._kind.name if self._kind is not None else repr(self._func)
        return f"Op({name})"


def make_op_adapter(op) -> Op:
    """
    Normalize a combiner argument into an :class:`Op`.

    Accepts an Op (returned as-is), an OpKind, or any binary callable.
    """
    if isinstance(op, Op):
        return op
    if isinstance(op, OpKind):
        return Op(_OP_KIND_FUNCS[op], kind=op)
    if not callable(op):
        raise TypeError(
            f"op must be a callable, Op or OpKind, got {type(op).__name__}"
        )
    return Op(op)


def resolve_result_type(op: Op, arg_types) -> TypeDescriptor:
    """
    Determine the width of ``op(a, b)`` for arguments of ``arg_types``.

    A declared result type wins. OpKind combiners follow numpy promotion.
    Arguments of any non-numeric type produce objects. Other callables are
    typed with Numba.
    """
    if op.result_type is not None:
        return op.result_type
    if not all(t.is_numeric for t in arg_types):
        return object_
    if op.kind is not None:
        return result_type(*arg_types)

    from ._jit import get_inferred_return_type

    return get_inferred_return_type(op.func, tuple(arg_types))


__all__ = ["Op", "OpKind", "make_op_adapter", "resolve_result_type"]
