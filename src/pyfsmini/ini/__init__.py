# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:58:40
# @Author : Chloride

from .config import IniConfig
from .consts import FsmState
from .errors import IniError, IniKeyNotFound, IniMalformedError, IniParseError
from .fsm import IniStateMachine
from .model import IniDocument, IniOption, IniSection
from .parser import IniParser
