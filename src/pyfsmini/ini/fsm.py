# -*- encoding: utf-8 -*-
# @File   : fsm.py
# @Time   : 2026/10/13 00:18:26
# @Author : Chloride

"""The character driven state machine behind `IniParser`.

Rules are evaluated top to bottom; for a given state the first row whose
trigger is the char itself, or the wildcard, wins. So the ROW ORDER MATTERS:
e.g. `InValue` must catch `"` before its wildcard appends it to the value.

Known quirks, kept on purpose:
1. A char right after a lone `\\r` (not followed by `\\n`) is dropped.
2. Key names and unquoted values lose their spaces and tabs,
   `key name = a b` reads as `keyname: ab`.
3. Line numbers drift once a quoted value spans multiple lines.
"""

import logging
from typing import Callable, Iterable, NamedTuple

from .consts import (
    BLANKS, COMMENT_MARKS, CR, DELIMITER, ESCAPE, LF, QUOTE,
    SECTION_CLOSE, SECTION_OPEN, WILDCARD, FsmState
)
from .errors import IniMalformedError, IniParseError
from .model import IniDocument, IniOption, IniSection

__all__ = ['FsmRule', 'IniStateMachine', 'RELAXED_RULES', 'STRICT_RULES']

FsmAction = Callable[['IniStateMachine', FsmState, str], None]


class FsmRule(NamedTuple):
    state: FsmState
    trigger: str  # a single char, or WILDCARD
    target: FsmState
    action: FsmAction | None = None


# FSM ACTIONS -- BEGIN
def _reject(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    raise IniParseError(fsm.line, state, char)


def _count_line(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    fsm.line += 1


def _drop_after_cr(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    logging.warning(f'line {fsm.line}: {char!r} after a bare CR is dropped.')
    fsm.line += 1


def _key_name(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    fsm.pending_key += char


def _begin_section(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    # `[` itself never belongs to the name.
    fsm.section_name = ''


def _section_name(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    fsm.section_name += char


def _close_section(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    fsm.last_section = fsm.document.append_section(fsm.section_name)
    fsm.section_name = ''


def _value(fsm: 'IniStateMachine', state: FsmState, char: str) -> None:
    """Shared by `=`, plain values, quoted values and escaped chars."""
    if fsm.pending_key:
        owner = (
            fsm.document.global_section
            if fsm.last_section is None
            else fsm.last_section)
        fsm.last_option = fsm.document.commit_option(owner, fsm.pending_key)
        fsm.pending_key = ''
    if state is FsmState.InOptions:  # it's the delimiter.
        return
    if fsm.last_option is None:
        logging.warning(
            f'line {fsm.line}: {char!r} has no key to belong to, dropped.')
    else:
        fsm.document.append_to_value(fsm.last_option, char)
    # multi-line string literal.
    if char == LF:
        fsm.line += 1
# FSM ACTIONS -- END


_S = FsmState


def _each(state: FsmState, chars: str, target: FsmState,
          action: FsmAction | None = None) -> list[FsmRule]:
    return [FsmRule(state, c, target, action) for c in chars]


RELAXED_RULES: tuple[FsmRule, ...] = (
    # [InOptions] key names could not have blanks.
    FsmRule(_S.InOptions, LF, _S.InOptions, _count_line),
    FsmRule(_S.InOptions, CR, _S.AfterCarriageReturn),
    *_each(_S.InOptions, BLANKS, _S.InOptions),
    *_each(_S.InOptions, COMMENT_MARKS, _S.Comment),
    FsmRule(_S.InOptions, DELIMITER, _S.InValue, _value),
    FsmRule(_S.InOptions, SECTION_OPEN, _S.InSectionName, _begin_section),
    FsmRule(_S.InOptions, WILDCARD, _S.InOptions, _key_name),

    # [Comment]
    FsmRule(_S.Comment, LF, _S.InOptions, _count_line),
    FsmRule(_S.Comment, CR, _S.AfterCarriageReturn),
    FsmRule(_S.Comment, WILDCARD, _S.Comment),

    # [InSectionName] could contain blanks, `;` and `#`.
    FsmRule(_S.InSectionName, SECTION_CLOSE, _S.AfterSectionClose,
            _close_section),
    FsmRule(_S.InSectionName, WILDCARD, _S.InSectionName, _section_name),

    # [AfterSectionClose] "[xxx] yyy", yyy is ignored.
    *_each(_S.AfterSectionClose, COMMENT_MARKS, _S.Comment),
    FsmRule(_S.AfterSectionClose, LF, _S.InOptions, _count_line),
    FsmRule(_S.AfterSectionClose, CR, _S.AfterCarriageReturn),
    FsmRule(_S.AfterSectionClose, WILDCARD, _S.AfterSectionClose),

    # [InValue]
    *_each(_S.InValue, COMMENT_MARKS, _S.Comment),
    FsmRule(_S.InValue, QUOTE, _S.InQuotedValue),
    *_each(_S.InValue, BLANKS, _S.InValue),
    FsmRule(_S.InValue, LF, _S.InOptions, _count_line),
    FsmRule(_S.InValue, CR, _S.AfterCarriageReturn),
    FsmRule(_S.InValue, WILDCARD, _S.InValue, _value),

    # [InQuotedValue]
    FsmRule(_S.InQuotedValue, ESCAPE, _S.AfterEscape),
    FsmRule(_S.InQuotedValue, QUOTE, _S.InValue),
    FsmRule(_S.InQuotedValue, WILDCARD, _S.InQuotedValue, _value),

    # [AfterEscape] copy whatever comes, no `\n` or `\t` decoding.
    FsmRule(_S.AfterEscape, WILDCARD, _S.InQuotedValue, _value),

    # [AfterCarriageReturn]
    FsmRule(_S.AfterCarriageReturn, LF, _S.InOptions, _count_line),
    FsmRule(_S.AfterCarriageReturn, WILDCARD, _S.InOptions, _drop_after_cr),
)


def _strict_rules() -> tuple[FsmRule, ...]:
    ret = list(RELAXED_RULES)
    # section names could not contain comment marks.
    at = ret.index(FsmRule(
        _S.InSectionName, WILDCARD, _S.InSectionName, _section_name))
    ret[at:at] = _each(_S.InSectionName, COMMENT_MARKS, _S.Invalid, _reject)
    ret.append(FsmRule(_S.Invalid, WILDCARD, _S.Invalid, _reject))
    return tuple(ret)


STRICT_RULES = _strict_rules()

_Compiled = dict[FsmState, tuple[dict[str, FsmRule], FsmRule | None]]


def _compile(rules: Iterable[FsmRule]) -> _Compiled:
    """Index rules per state, keeping first-match-wins semantics."""
    ret: _Compiled = {}
    for rule in rules:
        exact, wild = ret.get(rule.state, ({}, None))
        if wild is None:
            if rule.trigger == WILDCARD:
                wild = rule
            else:
                exact.setdefault(rule.trigger, rule)
        # rows after the wildcard are unreachable.
        ret[rule.state] = (exact, wild)
    return ret


_TABLES = {False: _compile(RELAXED_RULES), True: _compile(STRICT_RULES)}


class IniStateMachine:
    """Owns every bit of parse state; one instance per document."""

    def __init__(
        self, document: IniDocument | None = None, *,
        strict: bool = False
    ) -> None:
        self.document = IniDocument() if document is None else document
        self.state = FsmState.InOptions
        self.line = 1
        self.pending_key = ''
        self.section_name = ''
        self.last_section: IniSection | None = None
        self.last_option: IniOption | None = None
        self.__table = _TABLES[strict]

    def match(self, char: str) -> FsmRule | None:
        exact, wild = self.__table.get(self.state, ({}, None))
        return exact.get(char, wild)

    def step(self, char: str) -> None:
        rule = self.match(char)
        if rule is None:
            # every state owns a wildcard, but keep the table honest.
            raise IniParseError(self.line, self.state, char)
        if rule.action is not None:
            rule.action(self, self.state, char)
        self.state = rule.target

    def feed(self, chars: Iterable[str]) -> None:
        for char in chars:
            self.step(char)

    def finish(self) -> IniDocument:
        """Check the end state, then hand out the (now frozen) document."""
        if self.state is not FsmState.InOptions:
            logging.debug(f'INI input ends in state {self.state.name}.')
            raise IniMalformedError(self.line, self.state)
        self.document.freeze()
        return self.document
