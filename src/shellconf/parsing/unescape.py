#!/usr/bin/env python3
"""
SHELLCONF UNESCAPE ENGINE
-------------------------
Turns a raw, shell-quoted value token into the canonical value bash would
store for it, without performing any expansion.

Characters that would trigger expansion or word splitting must be escaped
with a backslash. Bash tolerates some of them unescaped when it can tell no
expansion follows (a '$' before a space, say); this engine never looks
ahead and requires the escape unconditionally.

Author: ShellConf Team
Date: 2026-10-18
"""

from typing import FrozenSet, Optional, Tuple

from shellconf.core.errors import (
    IllegalQuoteError,
    IllegalValueError,
    MismatchedQuoteError,
    UnescapedSpecialCharError,
)
from shellconf.core.models import EscapeState, QuoteKind
from shellconf.validator.validator import is_legal_value

# POSIX.1-2008 XCU 2.2
DOUBLE_QUOTED_MUST_ESCAPE: FrozenSet[str] = frozenset('$`\\"')
UNQUOTED_MUST_ESCAPE: FrozenSet[str] = frozenset('|&;<>()$`\\"\' \t')

EMPTY_TOKENS = ("", '""', "''")


def detect_quote(token: str, line: Optional[str] = None) -> Tuple[QuoteKind, str]:
    """
    Returns the quote kind of `token` and its body with the quotes removed.
    Raises MismatchedQuoteError when the closing quote differs. A lone
    quote character opens and closes itself, giving an empty body.
    """
    first = token[:1]
    if first not in ('"', "'"):
        return QuoteKind.NONE, token

    if token[-1] != first:
        raise MismatchedQuoteError(line if line is not None else token)

    return QuoteKind(first), token[1:-1]


def _scan(body: str, kind: QuoteKind, line: str) -> str:
    special = DOUBLE_QUOTED_MUST_ESCAPE if kind is QuoteKind.DOUBLE else UNQUOTED_MUST_ESCAPE
    out = []
    state = EscapeState.IDLE

    for char in body:
        if state is EscapeState.IDLE:
            if char == "\\":
                state = EscapeState.ESCAPING
            elif char in special:
                raise UnescapedSpecialCharError(char, kind, line)
            else:
                out.append(char)
            continue

        # Bash keeps the backslash before ordinary characters only
        # inside double quotes
        if char not in special and kind is QuoteKind.DOUBLE:
            out.append("\\")
        out.append(char)
        state = EscapeState.IDLE

    # A trailing lone backslash escapes nothing and is dropped
    return "".join(out)


def unescape(token: str, line: Optional[str] = None) -> str:
    """
    Converts a raw value token into its canonical value.

    `line` is only used to give errors their context; it defaults to the
    token itself.
    """
    if line is None:
        line = token

    if token in EMPTY_TOKENS:
        return ""

    kind, body = detect_quote(token, line)

    if kind is QuoteKind.SINGLE:
        # Everything between single quotes is literal, but there is no way
        # to escape a single quote itself
        if "'" in body:
            raise IllegalQuoteError(line)
        value = body
    else:
        value = _scan(body, kind, line)

    if not is_legal_value(value):
        raise IllegalValueError(value, line)

    return value
