# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:04:37
# @Author : Chloride

from enum import Enum


class FsmState(int, Enum):
    InOptions = 0  # initial, and the only accepting one.
    Comment = 1
    InSectionName = 2
    AfterSectionClose = 3
    InValue = 4
    InQuotedValue = 5
    AfterEscape = 6
    AfterCarriageReturn = 7
    Invalid = 8  # strict dialect only.


# matches any char not listed for the state before it.
WILDCARD = ''

LF = '\n'
CR = '\r'
BLANKS = ' \t'
COMMENT_MARKS = ';#'
DELIMITER = '='
SECTION_OPEN = '['
SECTION_CLOSE = ']'
QUOTE = '"'
ESCAPE = '\\'
