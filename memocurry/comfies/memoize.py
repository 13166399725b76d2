"""
Unbounded memoization with pluggable cache keys.

Each call to memoize() creates a private cache owned by the returned
wrapper. A key policy turns the positional and keyword arguments of a
call into a cache key:

    join_key  -- str() of each argument joined by "-" (4 and "4" collide)
    repr_key  -- repr() of each argument joined by "-"
    tuple_key -- the arguments paired with their types; they must be hashable

Exceptions raised by the wrapped function are never cached.

Copyright 2024 ecmwf

Licensed under the Apache License, Version 2.0 (the "License")

http://www.apache.org/licenses/LICENSE-2.0
"""

import functools
import logging
import threading


def _join(parts, kwargs, conv):
    items = ['' if a is None else conv(a) for a in parts]
    items += ['{}={}'.format(k, conv(kwargs[k])) for k in sorted(kwargs)]
    return '-'.join(items)


def join_key(args, kwargs):
    return _join(args, kwargs, str)


def repr_key(args, kwargs):
    return _join(args, kwargs, repr)


def tuple_key(args, kwargs):
    key = (tuple((type(a), a) for a in args),
           tuple((k, type(v), v) for k, v in sorted(kwargs.items())))
    hash(key)  # unhashable arguments fail here, before the call
    return key


KEY_POLICIES = {
    'join': join_key,
    'repr': repr_key,
    'tuple': tuple_key,
}


def get_key_policy(name):
    try:
        return KEY_POLICIES[name]
    except KeyError:
        raise ValueError('unknown key policy "{}" (expected one of {})'.format(
            name, ', '.join(sorted(KEY_POLICIES))))


def memoize(obj=None, key=join_key, logger=None, thread_safe=False):
    """
    Return a memoized version of obj.

    Can be called directly or used as a decorator, with or without options:

        memoized = memoize(fn)

        @memoize
        def f(x): ...

        @memoize(key=tuple_key)
        def g(x, y): ...

    The cache is exposed as the .cache attribute of the wrapper and
    the key policy as .key
    """
    if not callable(key):
        raise TypeError('key policy {!r} must be callable'.format(key))
    if obj is None:
        return functools.partial(
            memoize, key=key, logger=logger, thread_safe=thread_safe)

    log = logger or logging.getLogger(__name__)
    cache = {}
    lock = threading.RLock() if thread_safe else None

    def lookup(args, kwargs):
        log.debug('Args: %s', ', '.join(
            [repr(a) for a in args] +
            ['{}={!r}'.format(k, v) for k, v in kwargs.items()]))
        k = key(args, kwargs)
        if k in cache:
            log.info('Memoized - Returning cached result for key: %s', k)
            return cache[k]
        log.info('Calculating result for key: %s...', k)
        result = obj(*args, **kwargs)
        log.info('Result calculated for key: %s - Caching. Result: %s',
                 k, result)
        cache[k] = result
        return result

    @functools.wraps(obj)
    def memoizer(*args, **kwargs):
        if lock is None:
            return lookup(args, kwargs)
        with lock:
            return lookup(args, kwargs)

    memoizer.cache = cache
    memoizer.key = key
    return memoizer
