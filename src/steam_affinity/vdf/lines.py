"""
Line classifier for text VDF.

Steam writes one construct per line: a key/value pair, a key that opens
an object, or a lone brace. Keys and values are tab-separated quoted
tokens.
"""

import re
from dataclasses import dataclass
from typing import Union

# A token must start at line start or right after a tab, "{" or a
# previous token's closing quote, and end at line end, a tab or "}".
_TOKEN_RE = re.compile(
    r'(?<![^\t{"])"((?:\\["\\]|\\(?!["\\])|[^"\\])*)"(?=[\t}]|$)'
)
_ESCAPE_RE = re.compile(r'\\(["\\])')


@dataclass(frozen=True)
class LeafPair:
    key: str
    value: str


@dataclass(frozen=True)
class ObjectKey:
    key: str


@dataclass(frozen=True)
class OpenBrace:
    pass


@dataclass(frozen=True)
class CloseBrace:
    pass


@dataclass(frozen=True)
class Ignorable:
    pass


LineKind = Union[LeafPair, ObjectKey, OpenBrace, CloseBrace, Ignorable]


def unescape(token: str) -> str:
    """Resolve \\" and \\\\ escapes."""
    return _ESCAPE_RE.sub(r"\1", token)


def escape(text: str) -> str:
    """Inverse of unescape: backslashes first, then quotes."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def find_tokens(line: str) -> list[str]:
    """Return the quoted tokens of a line, quotes stripped and un-escaped."""
    return [unescape(m.group(1)) for m in _TOKEN_RE.finditer(line)]


def classify(line: str) -> LineKind:
    """
    Determine the structural role of one line.

    Precedence: two tokens, one token, open brace, close brace. Anything
    else (blank lines, comments, stray text, three or more tokens) is
    ignorable.
    """
    line = line.rstrip("\r\n")
    if line.lstrip().startswith("//"):
        return Ignorable()

    tokens = find_tokens(line)
    if len(tokens) == 2:
        return LeafPair(tokens[0], tokens[1])
    if len(tokens) == 1:
        return ObjectKey(tokens[0])
    if tokens:
        return Ignorable()

    if "{" in line:
        return OpenBrace()
    if "}" in line:
        return CloseBrace()
    return Ignorable()
