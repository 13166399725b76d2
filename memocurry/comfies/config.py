"""
Module for reading the YAML configuration of the memoization example.

Items are addressed by dotted paths, e.g.:

    config = Config(YAMLConfigPath('demo.yml'))
    config.get('example.offset', None, type=int)
    config.get('memoize.key', 'join', choices=KEY_POLICIES)

Copyright 2024 ecmwf

Licensed under the Apache License, Version 2.0 (the "License")

http://www.apache.org/licenses/LICENSE-2.0
"""

import os
import collections.abc as collections

import yaml

# -----------------------------------
# module exceptions
# -----------------------------------


class ConfigError(Exception):
    """ Base exception """
    pass

class ConfigNotFoundError(ConfigError):
    pass

class ConfigLoadingError(ConfigError):
    pass

class ConfigItemNotFoundError(ConfigError):
    pass

class ConfigItemNotValueError(ConfigError):
    pass

class ConfigItemTypeError(ConfigError):
    pass


NO_DEFAULT = '__no_default__'


# ----------------------------------------
# config sources
# ----------------------------------------

# A source has two attributes:
#   .origin -- where the data came from, used in error messages
#   .data   -- nested dict tree


class DictConfig(object):
    """
    Config held in memory, e.g. the built-in defaults
    """
    def __init__(self, data, origin='<defaults>'):
        self.origin = origin
        self.data = data


class YAMLConfigPath(object):
    """
    YAML file given by its path; the top level must be a mapping
    """
    def __init__(self, filename):
        if not os.path.isfile(filename):
            raise ConfigNotFoundError('Cannot find "{}"'.format(filename))
        self.origin = os.path.abspath(filename)
        self.data = self._read(self.origin)

    @staticmethod
    def _read(filename):
        try:
            with open(filename) as stream:
                tree = yaml.safe_load(stream)
        except OSError as e:
            raise ConfigLoadingError('{}: {}'.format(filename, e.strerror))
        except yaml.YAMLError as e:
            raise ConfigLoadingError('{}: {}'.format(filename, e))
        if tree is None:
            return {}
        if not isinstance(tree, dict):
            raise ConfigLoadingError(
                '{}: top level item must be a mapping'.format(filename))
        return tree


# ---------------------------------------------------------------------
# value converters
# ---------------------------------------------------------------------

# Passed as the 'type' argument of Config.get(); they raise
# TypeError/ValueError for values they cannot convert.

TRUE_WORDS = ('true', 'yes', 'on', 't', 'y', '1')
FALSE_WORDS = ('false', 'no', 'off', 'f', 'n', '0')


def boolean(value):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_WORDS:
        return True
    if text in FALSE_WORDS:
        return False
    raise ValueError('not a boolean: {!r}'.format(value))


class List(object):
    """
    Converts a YAML sequence or a comma separated string into a list
    """
    def __init__(self, type=str):
        if not callable(type):
            raise ValueError('{!r} must be callable'.format(type))
        self.type = type

    def __call__(self, value):
        if isinstance(value, str):
            value = value.replace('\n', '').split(',')
        return [self.type(x) for x in value]


def word(value):
    text = str(value)
    if not text.strip():
        raise ValueError('empty value')
    return text


def path(value):
    return os.path.expanduser(os.path.expandvars(word(value)))


def identity(value):
    return value


# ------------------------------------------
# An interface to the config data structure.
# ------------------------------------------


class Config(object):

    def __init__(self, source):
        self._source = source

    @property
    def origin(self):
        return self._source.origin

    @property
    def _data(self):
        return self._source.data

    def data(self, path, default=NO_DEFAULT):
        """
        Return the raw item (dict or value) at the dotted path
        """
        node = self._data
        if not path:
            return node
        for part in path.split('.'):
            try:
                node = node[part]
            except (KeyError, TypeError):
                if default == NO_DEFAULT:
                    raise ConfigItemNotFoundError(
                        'item "{}" not found in {}'.format(path, self.origin))
                return default
        return node

    def get(self, path, default=NO_DEFAULT, type=identity, choices=None):
        """
        Return the value at the dotted path converted with 'type'.

        The missing item's default is returned as is. With 'choices',
        either the raw or the converted value must be one of them.
        """
        type_name = getattr(type, '__name__', repr(type))
        if not callable(type):
            raise ValueError('{} must be callable'.format(type_name))
        value = self.data(path, default)
        if value is default:
            return default
        if isinstance(value, dict):
            raise ConfigItemNotValueError(
                '{}: item "{}" is not a value'.format(self.origin, path))
        try:
            converted = type(value)
        except (TypeError, ValueError):
            raise ConfigItemTypeError(
                '{}: "{}" has invalid value "{}" (expected {})'.format(
                    self.origin, path, value, type_name))
        if choices is not None:
            if not isinstance(choices, collections.Iterable):
                raise ValueError('choices must be iterable')
            if not (_is_choice(value, choices) or
                    _is_choice(converted, choices)):
                raise ConfigItemTypeError(
                    '{}: item "{}": unexpected value "{}"'.format(
                        self.origin, path, value))
        return converted

    def set(self, path, value):
        """
        Add or replace the item at the dotted path
        """
        for part in reversed(path.split('.')):
            value = {part: value}
        update(self._data, value)


# helper functions

def _is_choice(value, choices):
    # unhashable values cannot be looked up in dict or set choices
    try:
        return value in choices
    except TypeError:
        return False


def update(d, u):
    """
    Merge mapping u into d recursively and return d
    """
    for k, v in u.items():
        if isinstance(v, collections.Mapping):
            d[k] = update(d.get(k, {}), v)
        else:
            d[k] = v
    return d
