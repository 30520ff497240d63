# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2026/10/15 00:02:51
# @Author : Chloride

"""Read-only queries over a parsed INI.

Only `get()` tells "absent" apart from "present". The typed getters are
fail-soft: on a missing key OR a bad value, they hand back the `default`
given by the caller, so configuration consumers never crash on a typo.
"""

import logging
from datetime import timedelta
from os import PathLike
from typing import Callable, TextIO, TypeVar
from warnings import warn

from .convert import (
    parse_bool, parse_duration, parse_float, parse_int, parse_uint,
    split_list, split_map
)
from .errors import IniKeyNotFound
from .model import IniDocument
from .parser import IniParser

V = TypeVar('V')


class IniConfig:
    def __init__(self, parser: IniParser) -> None:
        self._parser = parser
        self.__warned = False

    @classmethod
    def fromfile(
        cls, filename: str | PathLike[str],
        encoding: str | None = None, *,
        strict: bool = False
    ) -> 'IniConfig':
        return cls(IniParser(filename, encoding, strict=strict))

    @classmethod
    def fromstream(cls, buf: TextIO, *, strict: bool = False) -> 'IniConfig':
        return cls(IniParser.fromstream(buf, strict=strict))

    @classmethod
    def fromstring(cls, text: str, *, strict: bool = False) -> 'IniConfig':
        return cls(IniParser.fromstring(text, strict=strict))

    def parse(self) -> 'IniConfig':
        """See `IniParser.parse()`. Returns self for chaining."""
        self._parser.parse()
        return self

    @property
    def document(self) -> IniDocument:
        if not self._parser.parsed and not self.__warned:
            self.__warned = True
            warn(f'{self._parser} is queried before `parse()`, '
                 'answers come from an empty document.')
        return self._parser.document

    def get(self, section: str, key: str) -> str:
        """Raw value of `key` in `section` (`''` for the global one).

        Raises:
            IniKeyNotFound: the section, or the key within, is absent.
        """
        opt = self.document.lookup(section, key)
        if opt is None:
            raise IniKeyNotFound(section, key)
        return opt.value

    def __contains__(self, item: tuple[str, str]) -> bool:
        return self.document.lookup(*item) is not None

    def _typed(
        self, section: str, key: str,
        converter: Callable[[str], V], default: V
    ) -> V:
        try:
            return converter(self.get(section, key))
        except IniKeyNotFound:
            return default
        except ValueError as e:
            logging.debug(f'[{section}] {key}: {e}, fallback to {default!r}.')
            return default

    def getbool(self, section: str, key: str, default: bool) -> bool:
        """Accepts `1 t T TRUE true True` and `0 f F FALSE false False`."""
        return self._typed(section, key, parse_bool, default)

    def getint(self, section: str, key: str, default: int) -> int:
        return self._typed(section, key, parse_int, default)

    def getuint(self, section: str, key: str, default: int) -> int:
        return self._typed(section, key, parse_uint, default)

    def getfloat(self, section: str, key: str, default: float) -> float:
        return self._typed(section, key, parse_float, default)

    def getduration(
        self, section: str, key: str, default: timedelta
    ) -> timedelta:
        return self._typed(section, key, parse_duration, default)

    def getlist(
        self, section: str, key: str, default: list[str]
    ) -> list[str]:
        """e.g. `key1 = 1,2,3,4` returns `['1', '2', '3', '4']`."""
        return self._typed(section, key, split_list, default)

    def getmap(
        self, section: str, key: str, default: dict[str, str]
    ) -> dict[str, str]:
        """e.g. `demo = key1:value1,key2:value2`."""
        return self._typed(section, key, split_map, default)

    def dump(self) -> str:
        """For debug only."""
        return self.document.dump()

    def __str__(self) -> str:
        return str(self._parser)
