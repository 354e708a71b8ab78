#!/usr/bin/env python3
"""
SHELLCONF PARSING PIPELINE
--------------------------
Runs a line through classifier, extractor, validator and unescape engine
in that order. Offers a strict per-line call, a strict multi-line call that
stops at the first bad line, and a best-effort iterator that reports every
line and never stops.

Author: ShellConf Team
Date: 2026-10-18
"""

import logging
from typing import Dict, Iterable, Iterator, Optional, Union

from shellconf.core.errors import IllegalNameError, ShellConfError, UndecodableTextError
from shellconf.core.models import Assignment, LineResult
from shellconf.parsing.lexer import classify, extract
from shellconf.parsing.unescape import unescape
from shellconf.validator.validator import is_legal_name

logger = logging.getLogger("shellconf.pipeline")

Line = Union[str, bytes]
Source = Union[str, Iterable[Line]]


def parse_line(line: Line) -> Optional[Assignment]:
    """
    Parses a single line.

    Returns None for blank and comment-only lines, the Assignment for a
    valid assignment, and raises a ShellConfError subclass otherwise.
    """
    line = decode_line(line)

    candidate = classify(line)
    if candidate is None:
        return None

    raw = extract(candidate)
    if not is_legal_name(raw.name):
        raise IllegalNameError(raw.name, line)

    value = unescape(raw.token, line)
    logger.debug(f"Parsed {raw.name!r} from {line!r}")
    return Assignment(raw.name, value)


def decode_line(line: Line) -> str:
    """Decodes a bytes line as UTF-8; text passes through untouched."""
    if not isinstance(line, bytes):
        return line
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UndecodableTextError(e, line.decode("utf-8", "replace")) from e


def split_lines(source: Source) -> Iterable[Line]:
    """Splits a string on LF only; iterables of lines pass through."""
    if isinstance(source, str):
        return source.split("\n")
    if isinstance(source, bytes) or not hasattr(source, "__iter__"):
        raise TypeError(f"Expected string or iterable of lines, got {type(source).__name__}")
    return source


def _display(line: Line) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", "replace")
    return line


def iter_parse(source: Source) -> Iterator[LineResult]:
    """
    Best-effort parsing: yields a LineResult for every line, carrying
    either the assignment, the error, or neither for blank lines.
    """
    for line_no, line in enumerate(split_lines(source), 1):
        try:
            assignment = parse_line(line)
        except ShellConfError as e:
            yield LineResult(line_no=line_no, raw_line=_display(line), error=e)
            continue
        yield LineResult(line_no=line_no, raw_line=_display(line), assignment=assignment)


def parse_lines(source: Source) -> Dict[str, str]:
    """
    Strict parsing: returns the assignments as an ordered dict, later
    duplicates overwriting earlier values. The first bad line raises, with
    `line_no` set on the error.
    """
    data: Dict[str, str] = {}
    for result in iter_parse(source):
        if not result.ok:
            result.error.line_no = result.line_no
            raise result.error
        if not result.is_blank:
            data[result.assignment.name] = result.assignment.value
    return data
