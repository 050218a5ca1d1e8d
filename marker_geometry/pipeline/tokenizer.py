"""
Flat JSON tokenizer in the style of jsmn.

Tokens come out in pre-order: a container token is followed by the tokens of
all its children, object children alternating key and value. Spans point into
the source buffer; no text is copied.
"""

import logging
import re

from marker_geometry.errors import InvalidJSONError, PartialJSONError, TokenCapacityError
from marker_geometry.state import ARRAY, OBJECT, PRIMITIVE, STRING, Token

logger = logging.getLogger(__name__)

_WHITESPACE = b" \t\r\n"
_PRIMITIVE_START = b"-0123456789tfn"
_PRIMITIVE_END = b" \t\r\n,]}"
_ESCAPES = b'"\\/bfnrtu'
_HEX_DIGITS = b"0123456789abcdefABCDEF"
_QUOTE, _BACKSLASH, _COLON, _COMMA = b'"\\:,'
_OPEN = {ord("{"): OBJECT, ord("["): ARRAY}
_CLOSE = {ord("}"): OBJECT, ord("]"): ARRAY}

_PRIMITIVE_RE = re.compile(rb"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null")

# What the innermost open container accepts next
_KEY = "key"
_KEY_OR_CLOSE = "key_or_close"
_COLON_NEXT = "colon"
_VALUE = "value"
_VALUE_OR_CLOSE = "value_or_close"
_COMMA_OR_CLOSE = "comma_or_close"


class _Tokenizer:
    def __init__(self, buffer: bytes, max_tokens: int):
        self.buffer = buffer
        self.max_tokens = max_tokens
        self.tokens: list[Token] = []
        self.stack: list[list] = []  # [token index, expectation]

    def run(self) -> list[Token]:
        buf = self.buffer
        pos = 0
        while pos < len(buf):
            c = buf[pos]
            if c in _WHITESPACE:
                pos += 1
            elif c in _OPEN:
                self._open(pos, _OPEN[c])
                pos += 1
            elif c in _CLOSE:
                self._close(pos, _CLOSE[c])
                pos += 1
            elif c == _QUOTE:
                pos = self._string(pos)
            elif c == _COLON:
                self._colon(pos)
                pos += 1
            elif c == _COMMA:
                self._comma(pos)
                pos += 1
            elif c in _PRIMITIVE_START:
                pos = self._primitive(pos)
            else:
                raise InvalidJSONError(f"Unexpected character {chr(c)!r}", pos)

        if self.stack:
            kind = self.tokens[self.stack[-1][0]]["kind"]
            raise PartialJSONError(f"Unclosed {kind}", len(buf))
        return self.tokens

    def _emit(self, kind: str, start: int, end: int) -> int:
        if len(self.tokens) >= self.max_tokens:
            raise TokenCapacityError(f"More than {self.max_tokens} tokens", start)
        self.tokens.append(Token(kind=kind, start=start, end=end, size=0))
        return len(self.tokens) - 1

    def _begin_value(self, pos: int) -> None:
        """Check a value may start here and count it against its parent array."""
        if not self.stack:
            if self.tokens:
                raise InvalidJSONError("Unexpected content after root value", pos)
            return
        top = self.stack[-1]
        if top[1] not in (_VALUE, _VALUE_OR_CLOSE):
            raise InvalidJSONError("Unexpected value", pos)
        parent = self.tokens[top[0]]
        if parent["kind"] == ARRAY:
            parent["size"] += 1
        top[1] = _COMMA_OR_CLOSE

    def _open(self, pos: int, kind: str) -> None:
        self._begin_value(pos)
        index = self._emit(kind, pos, -1)
        self.stack.append([index, _KEY_OR_CLOSE if kind == OBJECT else _VALUE_OR_CLOSE])

    def _close(self, pos: int, kind: str) -> None:
        if not self.stack:
            raise InvalidJSONError("Unbalanced closing bracket", pos)
        index, expect = self.stack[-1]
        token = self.tokens[index]
        if token["kind"] != kind:
            raise InvalidJSONError(f"Mismatched closing bracket for {token['kind']}", pos)
        if expect not in (_KEY_OR_CLOSE, _VALUE_OR_CLOSE, _COMMA_OR_CLOSE):
            raise InvalidJSONError(f"Unexpected end of {kind}", pos)
        token["end"] = pos + 1
        self.stack.pop()

    def _string(self, pos: int) -> int:
        end = self._scan_string(pos)
        top = self.stack[-1] if self.stack else None
        if top is not None and top[1] in (_KEY, _KEY_OR_CLOSE):
            self.tokens[top[0]]["size"] += 1
            top[1] = _COLON_NEXT
        else:
            self._begin_value(pos)
        self._emit(STRING, pos + 1, end)
        return end + 1

    def _scan_string(self, pos: int) -> int:
        """Return the offset of the closing quote of the string opened at pos."""
        buf = self.buffer
        i = pos + 1
        while i < len(buf):
            c = buf[i]
            if c == _QUOTE:
                return i
            if c == _BACKSLASH:
                i += 1
                if i >= len(buf):
                    break
                if buf[i] not in _ESCAPES:
                    raise InvalidJSONError("Invalid escape sequence", i - 1)
                if buf[i] == ord("u"):
                    digits = buf[i + 1:i + 5]
                    if len(digits) < 4:
                        break
                    if any(d not in _HEX_DIGITS for d in digits):
                        raise InvalidJSONError("Invalid unicode escape", i - 1)
                    i += 4
            i += 1
        raise PartialJSONError("Unterminated string", pos)

    def _colon(self, pos: int) -> None:
        if not self.stack or self.stack[-1][1] != _COLON_NEXT:
            raise InvalidJSONError("Unexpected ':'", pos)
        self.stack[-1][1] = _VALUE

    def _comma(self, pos: int) -> None:
        if not self.stack or self.stack[-1][1] != _COMMA_OR_CLOSE:
            raise InvalidJSONError("Unexpected ','", pos)
        top = self.stack[-1]
        top[1] = _KEY if self.tokens[top[0]]["kind"] == OBJECT else _VALUE

    def _primitive(self, pos: int) -> int:
        buf = self.buffer
        end = pos
        while end < len(buf) and buf[end] not in _PRIMITIVE_END:
            end += 1
        if not _PRIMITIVE_RE.fullmatch(buf, pos, end):
            raise InvalidJSONError("Invalid primitive", pos)
        self._begin_value(pos)
        self._emit(PRIMITIVE, pos, end)
        return end


def tokenize(buffer: bytes, max_tokens: int) -> list[Token]:
    """Split a JSON document into at most max_tokens pre-order tokens."""
    tokens = _Tokenizer(buffer, max_tokens).run()
    logger.debug("Tokenized %d bytes into %d tokens", len(buffer), len(tokens))
    return tokens
