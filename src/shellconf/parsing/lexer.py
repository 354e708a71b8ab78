#!/usr/bin/env python3
"""
SHELLCONF LEXER - Line Classifier & Assignment Extractor
--------------------------------------------------------
Decides whether a line holds anything at all, and splits candidate
assignment lines into keyword, name, raw value token and trailer.

The value token is matched non-greedily so that an unquoted trailing ';'
or a whitespace-preceded '# comment' stays out of it, while a '#' glued to
the value is kept as literal content.

Author: ShellConf Team
Date: 2026-10-18
"""

import re
from typing import Optional

from shellconf.core.errors import LineSyntaxError
from shellconf.core.models import RawAssignment

KEYWORDS = ("declare", "export", "local")

# Empty, whitespace-only or comment-only lines
BLANK_PATTERN = re.compile(r'^[\t ]*?(?:#.*)?$')

# Group 1: Keyword, Group 2: Name, Group 3: Value token, Group 4: Trailer
LINE_PATTERN = re.compile(
    r'^\s*?(?:(declare|export|local)\s+?)?(\S+?)=(.*?)((?:\s*?;)?(?:\s*?|\s+?#.*)?)$',
    re.ASCII,
)

# What may legally follow a closed quoted value
TAIL_PATTERN = re.compile(r'(?:\s*;)?(?:\s*|\s+#.*)', re.ASCII)


def is_blank(line: str) -> bool:
    """True for lines that can never produce an assignment."""
    return line == "" or BLANK_PATTERN.match(line) is not None


def classify(line: str) -> Optional[str]:
    """
    Returns None for blank and comment-only lines, otherwise the line
    itself, unmodified, as a candidate assignment.
    """
    if is_blank(line):
        return None
    return line


def _closing_quote(text: str) -> int:
    """
    Index of the quote that closes the quoted string opening `text`, or -1.

    Backslashes escape the next character inside double quotes only;
    single-quoted strings end at the very next single quote.
    """
    quote = text[0]
    escaped = False
    for i in range(1, len(text)):
        char = text[i]
        if escaped:
            escaped = False
        elif char == "\\" and quote == '"':
            escaped = True
        elif char == quote:
            return i
    return -1


def _quoted_token(rest: str) -> Optional[str]:
    """
    Extracts a complete quoted token from the text after '=' when it is
    followed only by a legal tail. Returns None when it is not.
    """
    if not rest or rest[0] not in "\"'":
        return None
    end = _closing_quote(rest)
    if end == -1 or not TAIL_PATTERN.fullmatch(rest[end + 1:]):
        return None
    return rest[:end + 1]


def extract(line: str) -> RawAssignment:
    """
    Splits a candidate assignment line into its parts.
    Raises LineSyntaxError when the line is not an assignment at all.
    """
    match = LINE_PATTERN.match(line)
    if match is None:
        raise LineSyntaxError(line)

    keyword, name, token, trailer = match.groups()

    # Protect ' #' and ' ;' inside a properly closed quoted value
    quoted = _quoted_token(line[match.start(3):])
    if quoted is not None and quoted != token:
        token = quoted
        trailer = line[match.start(3) + len(quoted):]

    return RawAssignment(
        name=name,
        token=token,
        keyword=keyword,
        trailer=trailer,
        raw_line=line,
    )
