# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 01:40:09
# @Author : Chloride

"""Where INI text comes from: a file on disk, or any readable text stream.

The parser itself never looks at bytes. Files get decoded first,
with the codec given, else the system default, else whatever `chardet`
guesses, so the state machine only ever sees `str` chars.
"""

import logging
from io import StringIO
from os import PathLike
from typing import TextIO

import chardet

from ..abstract import FileHandler
from .errors import IniError
from .fsm import IniStateMachine
from .model import IniDocument


class IniParser(FileHandler[IniDocument]):
    CHUNK_SIZE = 8192

    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        strict: bool = False
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._stream: TextIO | None = None
        self.__fsm = IniStateMachine(strict=strict)
        self.__parsed = False
        self.__error: Exception | None = None

    @classmethod
    def fromstream(cls, buf: TextIO, *, strict: bool = False) -> 'IniParser':
        """Parse an already decoded text stream, e.g. `sys.stdin`."""
        # `open(fd)` streams are named by an int.
        ret = cls(str(getattr(buf, 'name', '<stream>')), strict=strict)
        ret._stream = buf
        return ret

    @classmethod
    def fromstring(cls, text: str, *, strict: bool = False) -> 'IniParser':
        return cls.fromstream(StringIO(text), strict=strict)

    @property
    def document(self) -> IniDocument:
        """Empty before `parse()`.

        After a failed parse it holds whatever was read up to the failure,
        unfrozen, e.g. every pair of a file missing its final line break.
        """
        return self.__fsm.document

    @property
    def parsed(self) -> bool:
        return self.__parsed

    @property
    def line(self) -> int:
        return self.__fsm.line

    @staticmethod
    def _decode_file(filename: str) -> str:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            return raw.decode('gbk')

    def _load(self) -> str:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return fp.read()
        except UnicodeDecodeError:
            logging.debug(f'"{self._fn}" is not {self._codec}, guessing.')
            return self._decode_file(self._fn)

    def readstream(self, buf: TextIO) -> None:
        while chunk := buf.read(self.CHUNK_SIZE):
            self.__fsm.feed(chunk)

    def parse(self) -> IniDocument:
        """Run the state machine over the whole input, once.

        Calling it again returns the very same document (or raises the
        very same error) instead of reading anything twice.

        Raises:
            - `OSError` or `UnicodeDecodeError` if the file is not readable.
              Nothing is parsed then, so the call may be retried.
              (a stream failing halfway is final, like the errors below.)
            - `IniParseError` if a reject rule fired (strict dialect).
            - `IniMalformedError` if the input ended inside a comment,
              section header, value or string literal.
        """
        if self.__error is not None:
            raise self.__error
        if self.__parsed:
            return self.__fsm.document

        text = None if self._stream is not None else self._load()
        self.__parsed = True
        logging.debug(f'Parsing INI: {self}')
        try:
            if text is None:
                self.readstream(self._stream)
            else:
                self.__fsm.feed(text)
            ret = self.__fsm.finish()
        except (IniError, OSError, UnicodeDecodeError) as e:
            # input is half consumed, never feed the same document again.
            self.__error = e
            raise
        logging.debug(
            f'Parsed {len(ret) - 1} section(s), {self.line} line(s): {self}')
        return ret

    def read(self) -> IniDocument:
        """`FileHandler` flavored `parse()`."""
        return self.parse()

    def __str__(self) -> str:
        return "INI: " + super().__str__() + f"({self._codec})"
