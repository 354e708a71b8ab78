#!/usr/bin/env python3
"""
SHELLCONF VALIDATOR - The Judge
-------------------------------
The final gate before an assignment is handed to the store. Names must be
legal bash identifiers and values must be storable on a single line.

Author: ShellConf Team
Date: 2026-10-18
"""

import re

NAME_PATTERN = re.compile(r'[_A-Za-z][A-Za-z0-9_]*')

# Bytes that can never appear in a canonical value
ILLEGAL_VALUE_CHARS = ("\0", "\r", "\n")


def is_legal_name(name: str) -> bool:
    """
    Returns whether `name` may be used as a variable name.

    '_' matches the identifier grammar but bash reserves it for the last
    argument of the previous command, so it is rejected here.
    """
    if name == "_":
        return False
    return NAME_PATTERN.fullmatch(name) is not None


def is_legal_value(value: str) -> bool:
    """Returns whether a canonical (already unescaped) value may be stored."""
    return not any(c in value for c in ILLEGAL_VALUE_CHARS)
