"""Lexical colouring for JSON-like body lines.

This is a heuristic lexer, not a parser: invalid JSON still tokenizes, and
a quoted string counts as a key when the next non-space character is ':'.
"""

import re
from typing import List, Tuple

DELIMITER = "delimiter"
KEY = "key"
STRING = "string"
LITERAL = "literal"
NUMBER = "number"
PLAIN = "plain"

Token = Tuple[str, str]

_QUOTED = r'"(?:\\.|[^"\\])*"'
TOKEN_RE = re.compile(
    rf"{_QUOTED}(?=\s*:)"
    rf"|{_QUOTED}"
    r"|\b-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\b"
    r"|\btrue\b|\bfalse\b|\bnull\b"
    r"|[{}\[\],:]"
)
_LITERALS = frozenset({"true", "false", "null"})


def _classify(line: str, text: str, end: int) -> str:
    if text in ("{", "}", "[", "]"):
        return DELIMITER
    if text.startswith('"'):
        return KEY if line[end:].lstrip().startswith(":") else STRING
    if text in _LITERALS:
        return LITERAL
    if text[0] == "-" or text[0].isdigit():
        return NUMBER
    return PLAIN


def tokenize_line(line: str) -> List[Token]:
    """Split line into (text, style) pairs whose texts concatenate back to line."""
    tokens: List[Token] = []
    cursor = 0
    for match in TOKEN_RE.finditer(line):
        start, end = match.span()
        if start > cursor:
            tokens.append((line[cursor:start], PLAIN))
        text = match.group(0)
        tokens.append((text, _classify(line, text, end)))
        cursor = end
    if cursor < len(line):
        tokens.append((line[cursor:], PLAIN))
    if not tokens:
        tokens.append((line, PLAIN))
    return tokens


__all__ = ["tokenize_line", "TOKEN_RE", "DELIMITER", "KEY", "STRING", "LITERAL", "NUMBER", "PLAIN"]
