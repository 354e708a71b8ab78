"""
ShellConf - parse and re-serialize bash-style variable assignments
without running a shell.
"""

from shellconf.core.engine import ShellConf, load_files
from shellconf.core.errors import (
    IllegalNameError,
    IllegalQuoteError,
    IllegalValueError,
    LineSyntaxError,
    MismatchedQuoteError,
    ShellConfError,
    UndecodableTextError,
    UnescapedSpecialCharError,
)
from shellconf.core.models import Assignment, LineResult, QuoteKind, RawAssignment
from shellconf.parsing.lexer import classify, extract, is_blank
from shellconf.parsing.pipeline import iter_parse, parse_line, parse_lines
from shellconf.parsing.serializer import double_quote, serialize
from shellconf.parsing.unescape import detect_quote, unescape
from shellconf.validator.validator import is_legal_name, is_legal_value

__version__ = "1.0.0"

__all__ = [
    "Assignment",
    "IllegalNameError",
    "IllegalQuoteError",
    "IllegalValueError",
    "LineResult",
    "LineSyntaxError",
    "MismatchedQuoteError",
    "QuoteKind",
    "RawAssignment",
    "ShellConf",
    "ShellConfError",
    "UndecodableTextError",
    "UnescapedSpecialCharError",
    "classify",
    "detect_quote",
    "double_quote",
    "extract",
    "is_blank",
    "is_legal_name",
    "is_legal_value",
    "iter_parse",
    "load_files",
    "parse_line",
    "parse_lines",
    "serialize",
    "unescape",
]
