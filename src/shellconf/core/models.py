#!/usr/bin/env python3
"""
SHELLCONF CORE MODELS
---------------------
Defines the fundamental data structures used across the ShellConf parser.
These models represent one line of a shell dotfile at each stage of parsing.

Author: ShellConf Team
Date: 2026-10-18
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QuoteKind(Enum):
    """Quoting that surrounds a raw value token. Selects the escape rules."""
    NONE = None
    SINGLE = "'"
    DOUBLE = '"'


class EscapeState(Enum):
    """States of the backslash scanner used while unescaping."""
    IDLE = 0
    ESCAPING = 1


@dataclass
class RawAssignment:
    """
    A candidate assignment line split into its parts, before any
    validation or unescaping has happened.
    """
    name: str                      # Unvalidated variable name
    token: str                     # Raw value token, quotes included
    keyword: Optional[str] = None  # 'declare', 'export' or 'local'
    trailer: str = ""              # Trailing ';' and/or '# comment'
    raw_line: str = ""             # The line as it was given


@dataclass(frozen=True)
class Assignment:
    """
    A validated (name, value) pair. The value is canonical: fully
    unescaped and free of NUL, CR and LF.
    """
    name: str
    value: str

    def as_tuple(self):
        return self.name, self.value


@dataclass
class LineResult:
    """
    Outcome of parsing one line in best-effort mode.

    Exactly one of `assignment` and `error` is set for a non-blank line;
    both are None for blank and comment-only lines.
    """
    line_no: int
    raw_line: str
    assignment: Optional[Assignment] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_blank(self) -> bool:
        return self.assignment is None and self.error is None
