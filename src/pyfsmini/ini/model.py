# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 21:32:51
# @Author : Chloride

"""
Ordered INI tree, as the state machine builds it.

Unlike a `dict` based INI class, nothing here gets merged:

    ```ini
    key = global    ; lives in the anonymous section, i.e. `[]`.

    [section]
    key = 1
    key = 2         ; kept, but lookups answer "1".
    [section]       ; a second, independent section with the same name.
    other = 3
    ```
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Iterator, overload

import yaml


@dataclass(frozen=True)
class IniOption:
    """Read-only to users. Only `IniDocument.append_to_value()` grows
    `value`, in place, while the document is still being parsed."""
    name: str
    value: str = ''


class IniSection(Sequence[IniOption]):
    """Options of one `[header]` (or of the file head), in file order."""

    def __init__(self, name: str, options: Iterable[IniOption] = ()) -> None:
        self.__name = name
        # appended by IniDocument only.
        self._options: list[IniOption] = list(options)

    @property
    def name(self) -> str:
        return self.__name

    @property
    def options(self) -> tuple[IniOption, ...]:
        return tuple(self._options)

    @overload
    def __getitem__(self, index: int) -> IniOption: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[IniOption]: ...

    def __getitem__(self, index):
        return self._options[index]

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[IniOption]:
        return iter(self._options)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniSection):
            return NotImplemented
        return self.name == other.name and self._options == other._options

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"[{self.name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self._options))

    def find(self, key: str) -> IniOption | None:
        """First option named `key`, so duplicates never shadow it."""
        for opt in self._options:
            if opt.name == key:
                return opt
        return None

    def get(self, key: str, default: str | None = None) -> str | None:
        opt = self.find(key)
        return default if opt is None else opt.value

    def to_pairs(self) -> list[tuple[str, str]]:
        return [(opt.name, opt.value) for opt in self._options]


class IniDocument(Sequence[IniSection]):
    """A whole INI file.

    `self[0]` is always the global (anonymous) section, named `''`,
    followed by the named sections in the order their headers closed.
    """

    def __init__(self) -> None:
        self.__sections: list[IniSection] = [IniSection('')]
        self.__frozen = False

    @overload
    def __getitem__(self, index: int) -> IniSection: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[IniSection]: ...

    def __getitem__(self, index):
        return self.__sections[index]

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d, .frozen = %s }' % (
            len(self.__sections), self.__frozen)

    @property
    def global_section(self) -> IniSection:
        """Pairs located at file head, not belonging to any header."""
        return self.__sections[0]

    @property
    def sections(self) -> tuple[IniSection, ...]:
        return tuple(self.__sections)

    @property
    def frozen(self) -> bool:
        return self.__frozen

    def freeze(self) -> None:
        self.__frozen = True

    def __check_mutable(self) -> None:
        if self.__frozen:
            raise RuntimeError('INI document is read-only once parsed.')

    # mutation API, for the state machine only.
    def append_section(self, name: str) -> IniSection:
        self.__check_mutable()
        sect = IniSection(name)
        self.__sections.append(sect)
        return sect

    def commit_option(self, section: IniSection, key: str) -> IniOption:
        self.__check_mutable()
        opt = IniOption(key)
        section._options.append(opt)
        return opt

    def append_to_value(self, option: IniOption, char: str) -> None:
        self.__check_mutable()
        # in place, the state machine keeps a ref to the open option.
        object.__setattr__(option, 'value', option.value + char)

    # lookups.
    def find_sections(self, name: str) -> Iterator[IniSection]:
        """Every section called `name`, in file order.

        `''` always means the global section, even if some header
        was literally written as `[]`.
        """
        if not name:
            yield self.global_section
            return
        for sect in self.__sections[1:]:
            if sect.name == name:
                yield sect

    def find_section(self, name: str) -> IniSection | None:
        return next(self.find_sections(name), None)

    @staticmethod
    def find_option(section: IniSection, key: str) -> IniOption | None:
        return section.find(key)

    def lookup(self, section: str, key: str) -> IniOption | None:
        """Scan all sections sharing the name; the first hit wins."""
        for sect in self.find_sections(section):
            if (opt := sect.find(key)) is not None:
                return opt
        return None

    def to_list(self) -> list[dict[str, Any]]:
        return [
            {'section': sect.name, 'options': sect.to_pairs()}
            for sect in self.__sections
        ]

    def dump(self) -> str:
        """For debug only. The layout may change at any time."""
        # tuples are not safe-dumpable, hence lists.
        return yaml.safe_dump(
            [
                {
                    'section': i['section'],
                    'options': [list(j) for j in i['options']]
                }
                for i in self.to_list()
            ],
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False)
