# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:47:13
# @Author : Chloride

import logging

from .ini import (
    FsmState,
    IniConfig,
    IniDocument,
    IniError,
    IniKeyNotFound,
    IniMalformedError,
    IniOption,
    IniParseError,
    IniParser,
    IniSection,
    IniStateMachine,
)

__all__ = [
    'IniConfig', 'IniParser', 'IniStateMachine', 'FsmState',
    'IniDocument', 'IniSection', 'IniOption',
    'IniError', 'IniParseError', 'IniMalformedError', 'IniKeyNotFound'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
