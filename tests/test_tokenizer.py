import pytest

from marker_geometry.errors import (
    InvalidJSONError,
    PartialJSONError,
    TokenCapacityError,
    TokenizeError,
)
from marker_geometry.pipeline.cursor import token_text
from marker_geometry.pipeline.tokenizer import tokenize


def _layout(buffer: bytes):
    return [(t["kind"], token_text(buffer, t), t["size"]) for t in tokenize(buffer, 64)]


def test_pre_order_layout():
    buffer = b'{"a": [1, "x"], "b": {"c": null}}'
    assert _layout(buffer) == [
        ("object", buffer.decode(), 2),
        ("string", "a", 0),
        ("array", '[1, "x"]', 2),
        ("primitive", "1", 0),
        ("string", "x", 0),
        ("string", "b", 0),
        ("object", '{"c": null}', 1),
        ("string", "c", 0),
        ("primitive", "null", 0),
    ]


def test_string_span_excludes_quotes_and_keeps_escapes():
    buffer = b'{"a\\"b": -1.5e3}'
    tokens = tokenize(buffer, 8)
    assert token_text(buffer, tokens[1]) == 'a\\"b'
    assert tokens[1]["end"] - tokens[1]["start"] == 4
    assert token_text(buffer, tokens[2]) == "-1.5e3"


def test_whitespace_and_empty_input():
    assert tokenize(b"", 8) == []
    assert tokenize(b" \n\t ", 8) == []
    assert len(tokenize(b'\n{ "a" :\r\n [ ] }\n', 8)) == 3


@pytest.mark.parametrize("buffer", [
    b'{"a": [1, 2}',
    b'{"a": 1}}',
    b'{"a" 1}',
    b'{"a": 1 "b": 2}',
    b"[1,]",
    b'{"a": tru}',
    b'{"a": 01}',
    b'{1: 2}',
    b'{"a": 1} {}',
    b'{"a": "\\q"}',
    b"{'a': 1}",
])
def test_malformed_input(buffer):
    with pytest.raises(InvalidJSONError):
        tokenize(buffer, 64)


@pytest.mark.parametrize("buffer", [
    b'{"a": [1, 2]',
    b'{"a": "abc',
    b"[[[",
])
def test_truncated_input(buffer):
    with pytest.raises(PartialJSONError):
        tokenize(buffer, 64)


def test_token_capacity():
    assert len(tokenize(b"[1, 2, 3]", 4)) == 4
    with pytest.raises(TokenCapacityError) as exc_info:
        tokenize(b"[1, 2, 3]", 3)
    assert exc_info.value.position == 7


def test_errors_share_a_base_class():
    with pytest.raises(TokenizeError):
        tokenize(b"{", 8)
