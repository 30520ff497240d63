# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 21:10:02
# @Author : Chloride

from .consts import FsmState


class IniError(Exception):
    """Base of everything this package raises on its own."""
    pass


class IniParseError(IniError):
    """A reject rule of the state machine fired."""
    def __init__(self, line: int, state: FsmState, char: str) -> None:
        super().__init__(
            f'Parse error at line {line}: {char!r} rejected in {state.name}')
        self.line = line
        self.state = state
        self.char = char


class IniMalformedError(IniError):
    """Input ended inside a comment, header, value or literal."""
    def __init__(self, line: int, state: FsmState) -> None:
        super().__init__(
            f'Input is malformed, ends inside {state.name} (line {line})')
        self.line = line
        self.state = state


class IniKeyNotFound(IniError, KeyError):
    def __init__(self, section: str, key: str) -> None:
        super().__init__(section, key)
        self.section = section
        self.key = key

    def __str__(self) -> str:
        # KeyError would repr() the args tuple.
        return f'key "{self.key}" not found in [{self.section}]'
