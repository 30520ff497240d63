# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2026/10/14 22:37:45
# @Author : Chloride

"""Raw value -> typed value. Every function raises `ValueError` on bad input.

No stripping is done here: the parser already drops blanks from unquoted
values, and blanks written inside quotes are taken as meant.
"""

from datetime import timedelta
from fractions import Fraction
from math import isinf
from re import IGNORECASE
from re import compile as regex

__all__ = [
    'parse_bool', 'parse_int', 'parse_uint', 'parse_float',
    'parse_duration', 'split_list', 'split_map'
]

INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_BOOLS = {
    '1': True, 't': True, 'T': True,
    'TRUE': True, 'true': True, 'True': True,
    '0': False, 'f': False, 'F': False,
    'FALSE': False, 'false': False, 'False': False,
}

# base prefix detection; a `_` sits between digits, or right after a prefix.
_INTEGER = regex(
    r'(?P<sign>[+-]?)(?P<digits>'
    r'0[xX](?:_?[0-9a-fA-F])+|0[bB](?:_?[01])+|0[oO](?:_?[0-7])+'
    r'|(?P<octal>0(?:_?[0-7])+)'
    r'|0|[1-9](?:_?[0-9])*)')

_HEX_PREFIX = regex(r'[+-]?0[xX]')
# the `p` exponent is mandatory.
_HEX_FLOAT = regex(
    r'[+-]?0[xX](?=\.?[0-9a-fA-F])[0-9a-fA-F]*(?:\.[0-9a-fA-F]*)?'
    r'[pP][+-]?[0-9]+')
_BAD_DEC_UNDERSCORE = regex(r'(?<![0-9])_|_(?![0-9])')
_BAD_HEX_UNDERSCORE = regex(r'(?<![0-9a-fA-FxX])_|_(?![0-9a-fA-F])')
_INF_NAN = regex(r'[+-]?(inf|infinity|nan)', IGNORECASE)

_DURATION_ITEM = regex(r'([0-9]*)(?:\.([0-9]*))?([^0-9.]+?)(?=[0-9.]|$)')
_NANOSECONDS = {
    'ns': 1,
    'us': 1000,
    'µs': 1000,  # micro sign
    'μs': 1000,  # greek mu
    'ms': 1000_000,
    's': 1000_000_000,
    'm': 60 * 1000_000_000,
    'h': 60 * 60 * 1000_000_000,
}


def parse_bool(text: str) -> bool:
    try:
        return _BOOLS[text]
    except KeyError:
        raise ValueError(f'invalid boolean: {text!r}') from None


def _integer(text: str) -> int:
    if (m := _INTEGER.fullmatch(text)) is None:
        raise ValueError(f'invalid integer: {text!r}')
    if m['octal'] is not None:  # `017`, C style.
        value = int(m['octal'], 8)
    else:
        value = int(m['digits'], 0)
    return -value if m['sign'] == '-' else value


def parse_int(text: str) -> int:
    """Signed 64-bit integer, e.g. `-42`, `0x2A`, `0o52`, `052`, `0b101010`."""
    value = _integer(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f'integer out of range: {text!r}')
    return value


def parse_uint(text: str) -> int:
    if text[:1] in ('+', '-'):
        raise ValueError(f'invalid unsigned integer: {text!r}')
    value = _integer(text)
    if value > UINT64_MAX:
        raise ValueError(f'unsigned integer out of range: {text!r}')
    return value


def parse_float(text: str) -> float:
    """Decimal or `0x1.8p1` style hex, with `_` only between digits."""
    if text != text.strip():
        raise ValueError(f'invalid float: {text!r}')
    if _HEX_PREFIX.match(text):
        if _BAD_HEX_UNDERSCORE.search(text):
            raise ValueError(f'invalid float: {text!r}')
        digits = text.replace('_', '')
        if not _HEX_FLOAT.fullmatch(digits):
            raise ValueError(f'invalid float: {text!r}')
        try:
            return float.fromhex(digits)
        except OverflowError:
            raise ValueError(f'float out of range: {text!r}') from None
    if _BAD_DEC_UNDERSCORE.search(text):
        raise ValueError(f'invalid float: {text!r}')
    value = float(text.replace('_', ''))
    if isinf(value) and not _INF_NAN.fullmatch(text):
        raise ValueError(f'float out of range: {text!r}')
    return value


def parse_duration(text: str) -> timedelta:
    """A signed sequence of decimal numbers with units,
    like `300ms`, `-1.5h` or `2h45m`.

    Valid units are `ns`, `us` (or `µs`), `ms`, `s`, `m`, `h`.
    Below-microsecond parts are rounded, as `timedelta` can't hold them.
    """
    body = text[1:] if text[:1] in ('+', '-') else text
    if body == '0':
        return timedelta(0)
    if not body:
        raise ValueError(f'invalid duration: {text!r}')

    total, pos = Fraction(0), 0
    while pos < len(body):
        m = _DURATION_ITEM.match(body, pos)
        if m is None:
            raise ValueError(f'invalid duration: {text!r}')
        whole, frac, unit = m.groups()
        if not whole and not frac:
            raise ValueError(f'invalid duration: {text!r}')
        if unit not in _NANOSECONDS:
            raise ValueError(f'unknown unit {unit!r} in duration {text!r}')
        number = Fraction(int(whole or '0'))
        if frac:
            number += Fraction(int(frac), 10 ** len(frac))
        total += number * _NANOSECONDS[unit]
        pos = m.end()

    if total > INT64_MAX:
        raise ValueError(f'duration out of range: {text!r}')
    if text[0] == '-':
        total = -total
    return timedelta(microseconds=round(total / 1000))


def split_list(text: str) -> list[str]:
    """`1,2,3` -> `['1', '2', '3']`, items kept as they are."""
    return text.split(',')


def split_map(text: str) -> dict[str, str]:
    """`a:1,b:2` -> `{'a': '1', 'b': '2'}`. Later duplicates override.

    Each item splits at its first `:`, so `url:http://x` keeps the value whole.
    """
    ret: dict[str, str] = {}
    for item in text.split(','):
        key, sep, value = item.partition(':')
        if not sep:
            raise ValueError(f'map item without ":": {item!r}')
        ret[key] = value
    return ret
