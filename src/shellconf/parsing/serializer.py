#!/usr/bin/env python3
"""
SHELLCONF SERIALIZER
--------------------
Writes canonical values back out as bash-safe double-quoted assignments.
Nothing here validates: callers hand in names and values that already
passed the validator.

Author: ShellConf Team
Date: 2026-10-18
"""

from typing import Optional

from shellconf.parsing.unescape import DOUBLE_QUOTED_MUST_ESCAPE


def double_quote(value: str) -> str:
    """Escapes the double-quote specials in `value` and wraps it in quotes."""
    escaped = "".join("\\" + c if c in DOUBLE_QUOTED_MUST_ESCAPE else c for c in value)
    return f'"{escaped}"'


def serialize(name: str, value: str = "", prefix: Optional[str] = None) -> str:
    """
    Produces an assignment statement such as `export FOO="bar"`.
    An empty or missing prefix is left out entirely.
    """
    head = f"{prefix} " if prefix else ""
    return f"{head}{name}={double_quote(value)}"
