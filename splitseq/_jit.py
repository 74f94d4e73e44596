# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""
Result-type inference for Python combiners.

Python callables passed to zip and pair cursors are typed with Numba for the
element widths they will receive, so the cursor can report the width of the
values it produces. This module is imported lazily, only when a plain Python
callable is used without a declared result type.
"""

from __future__ import annotations

import inspect
from typing import Callable, Sequence

from numba import njit
from numba.core.errors import NumbaError
from numba.np.numpy_support import as_dtype, from_dtype

from ._caching import cache_with_key
from ._types import TypeDescriptor, from_numpy_dtype, object_, result_type


def _to_numba_types(arg_types: Sequence[TypeDescriptor]) -> tuple:
    return tuple(from_dtype(t.dtype) for t in arg_types)


@cache_with_key(lambda func, arg_types: (func, tuple(arg_types)), maxsize=256)
def get_inferred_return_type(
    func: Callable, arg_types: Sequence[TypeDescriptor]
) -> TypeDescriptor:
    """
    Infer the width ``func`` returns for arguments of ``arg_types``.

    Callables that are not plain Python functions (builtins, ``operator``
    functions) follow numpy promotion of the argument types. Functions Numba
    cannot type, or whose return type has no numpy dtype (strings, tuples),
    produce ``object_``.

    Args:
        func: Binary Python function
        arg_types: TypeDescriptors of the arguments

    Returns:
        TypeDescriptor for the result
    """
    arg_types = tuple(arg_types)
    if not inspect.isfunction(func):
        return result_type(*arg_types)

    try:
        numba_args = _to_numba_types(arg_types)
        dispatcher = njit(func)
        dispatcher.compile(numba_args)
        return_type = dispatcher.overloads[numba_args].signature.return_type
        return from_numpy_dtype(as_dtype(return_type))
    except NumbaError:
        # also raised by as_dtype for unicode and tuple return types
        return object_
