# Copyright (c) 2025, NVIDIA CORPORATION & AFFILIATES. ALL RIGHTS RESERVED.
#
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

import collections
import functools
import threading


def cache_with_key(key, maxsize=None):
    """
    Cache the result of `func`, using the function `key` to compute
    the key for cache lookup. `key` receives all arguments passed to
    `func`.

    With `maxsize` set, the least recently used entry is evicted once the
    cache holds more than `maxsize` results. Cursor factories may be called
    from several worker threads at once, so the cache is guarded by a lock;
    a missing entry is computed outside of it. The wrapped function exposes
    ``cache_clear()`` and ``cache_len()``.
    """

    def deco(func):
        cache = collections.OrderedDict()
        lock = threading.Lock()

        @functools.wraps(func)
        def inner(*args, **kwargs):
            cache_key = key(*args, **kwargs)
            with lock:
                if cache_key in cache:
                    cache.move_to_end(cache_key)
                    return cache[cache_key]

            result = func(*args, **kwargs)

            with lock:
                cache[cache_key] = result
                cache.move_to_end(cache_key)
                if maxsize is not None and len(cache) > maxsize:
                    cache.popitem(last=False)
            return result

        def cache_clear():
            with lock:
                cache.clear()

        def cache_len():
            with lock:
                return len(cache)

        inner.cache_clear = cache_clear
        inner.cache_len = cache_len
        return inner

    return deco
