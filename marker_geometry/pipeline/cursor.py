"""
Forward-only cursor over a flat token list, and helpers that read token text
straight out of the source buffer.
"""

import re
from typing import Iterable

from marker_geometry.errors import SchemaError
from marker_geometry.state import ARRAY, OBJECT, STRING, Token


_LEADING_INT_RE = re.compile(rb"\s*([+-]?\d+)")


def _subtree_ends(tokens: list[Token]) -> list[int]:
    """For every token, the index just past the last token of its subtree.

    Filled back to front so each child's end is known before its parent's.
    """
    ends = [0] * len(tokens)
    for i in range(len(tokens) - 1, -1, -1):
        token = tokens[i]
        if token["kind"] == OBJECT:
            children = token["size"] * 2
        elif token["kind"] == ARRAY:
            children = token["size"]
        else:
            children = 0

        j = i + 1
        for _ in range(children):
            j = ends[j]
        ends[i] = j
    return ends


class TokenCursor:
    def __init__(self, tokens: list[Token], position: int = 0):
        self._tokens = tokens
        self._ends = _subtree_ends(tokens)
        self.position = position

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self._tokens)

    def peek(self) -> Token:
        if self.exhausted:
            raise SchemaError(f"Token stream ended at token {self.position}")
        return self._tokens[self.position]

    def advance(self) -> Token:
        """Step onto the next token; for containers this enters the subtree."""
        token = self.peek()
        self.position += 1
        return token

    def skip_subtree(self) -> Token:
        """Step past the current token and everything nested under it."""
        token = self.peek()
        self.position = self._ends[self.position]
        return token


def open_root_object(cursor: TokenCursor) -> Token:
    if cursor.exhausted or cursor.peek()["kind"] != OBJECT:
        raise SchemaError("Object expected")
    return cursor.advance()


def key_equals(buffer: bytes, token: Token, name: str) -> bool:
    if token["kind"] != STRING:
        return False
    key = name.encode("utf-8")
    return token["end"] - token["start"] == len(key) and buffer.startswith(key, token["start"])


def match_key(buffer: bytes, token: Token, names: Iterable[str]) -> str | None:
    for name in names:
        if key_equals(buffer, token, name):
            return name
    return None


def token_text(buffer: bytes, token: Token) -> str:
    return buffer[token["start"]:token["end"]].decode("utf-8", errors="replace")


def parse_int(buffer: bytes, token: Token) -> int:
    """Read the token like C atoi: leading integer digits, 0 when there are none."""
    m = _LEADING_INT_RE.match(buffer, token["start"], token["end"])
    return int(m.group(1)) if m else 0
