#!/usr/bin/env python3
"""
SHELLCONF ERRORS
----------------
Every way a single line can fail to parse. Each failure is its own class
so callers can tell them apart; all of them carry the offending line.

Author: ShellConf Team
Date: 2026-10-18
"""

from typing import Optional

from shellconf.core.models import QuoteKind


class ShellConfError(ValueError):
    """Base class for all line-level parse and validation failures."""

    def __init__(self, message: str, line: Optional[str] = None):
        self.message = message
        self.line = line
        self.line_no: Optional[int] = None
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} on line: {self.line}"


class LineSyntaxError(ShellConfError):
    """The line does not match the assignment grammar at all."""

    def __init__(self, line: Optional[str] = None):
        super().__init__("Unexpected character", line)

    def _format(self) -> str:
        if self.line is None:
            return self.message
        return f"Unexpected character in line: {self.line}"


class IllegalNameError(ShellConfError):
    def __init__(self, name: str, line: Optional[str] = None):
        self.name = name
        super().__init__(f"Illegal variable name '{name}'", line)

    def _format(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} in line: {self.line}"


class MismatchedQuoteError(ShellConfError):
    def __init__(self, line: Optional[str] = None):
        super().__init__("Quote mismatch", line)


class IllegalQuoteError(ShellConfError):
    def __init__(self, line: Optional[str] = None):
        super().__init__("Illegal single-quote in single-quoted value", line)


class UnescapedSpecialCharError(ShellConfError):
    def __init__(self, char: str, quote_kind, line: Optional[str] = None):
        self.char = char
        self.quote_kind = quote_kind
        context = "double-quoted" if quote_kind is QuoteKind.DOUBLE else "unquoted"
        super().__init__(f"Unescaped special character {char!r} in {context} value", line)


class IllegalValueError(ShellConfError):
    def __init__(self, value: str, line: Optional[str] = None):
        self.value = value
        if line is None:
            message = f"Illegal value {value!r}"
        else:
            message = "Illegal character in value"
        super().__init__(message, line)


class UndecodableTextError(ShellConfError):
    """
    Input bytes are not valid UTF-8. `line` holds the text with the bad
    bytes replaced by U+FFFD, so it can still be shown to the user.
    """

    def __init__(self, error: UnicodeDecodeError, line: Optional[str] = None,
                 source: Optional[str] = None):
        self.position = error.start
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Invalid UTF-8 at byte {error.start}{where}", line)
