"""
Currying helpers.

curry() turns a function of N positional arguments into a chain of
callables that collect arguments until N have been supplied:

    def volume(x, y, z):
        return x * y * z

    cvolume = curry(volume)
    cvolume(2)(3)(4)   # 24
    cvolume(2, 3)(4)   # 24
    volume_x2 = cvolume(2) # partial application, still waiting for y and z

Copyright 2024 ecmwf

Licensed under the Apache License, Version 2.0 (the "License")

http://www.apache.org/licenses/LICENSE-2.0
"""

import functools
import inspect
import logging


logger = logging.getLogger(__name__)


def required_arity(fn):
    """
    Number of positional parameters of fn that have no default
    """
    params = inspect.signature(fn).parameters.values()
    return len([p for p in params
                if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
                and p.default is p.empty])


class Curried(object):

    def __init__(self, func, arity, args=()):
        self.func = func
        self.arity = arity
        self.args = tuple(args)
        functools.update_wrapper(self, func, updated=())

    def __call__(self, *args):
        if not args:
            raise TypeError('{} expects at least one argument'.format(self))
        collected = self.args + args
        if len(collected) > self.arity:
            raise TypeError('{} takes {} argument(s) but {} were given'.format(
                getattr(self.func, '__name__', repr(self.func)),
                self.arity, len(collected)))
        if len(collected) == self.arity:
            return self.func(*collected)
        return Curried(self.func, self.arity, collected)

    def __repr__(self):
        return '<curried {} {}/{}>'.format(
            getattr(self.func, '__name__', repr(self.func)),
            len(self.args), self.arity)


def curry(fn, arity=None):
    if arity is None:
        arity = required_arity(fn)
    if not isinstance(arity, int) or isinstance(arity, bool) or arity < 1:
        raise ValueError('arity must be a positive integer, got {!r}'.format(
            arity))
    return Curried(fn, arity)


def add(a):
    """
    Curried addition: add(a)(b) == a + b
    """
    def add_b(b):
        logger.info('Adding %s and %s...', a, b)
        return a + b
    return add_b
