"""Presentation helpers: listings, pretty-printed objects and verbose traces."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Iterable, TextIO

from clerc.logging_config import get_trace_logger

if TYPE_CHECKING:
    from clerc.config import ClercConfig

INDENT = 4

_WHITESPACE = " \t\r\n"
# Characters that end a number or a literal (true, false, null).
_TOKEN_END = _WHITESPACE + ',:]}"{['


def trace(config: ClercConfig, message: str) -> None:
    """Print ``*** <message>`` on stdout if *config* is verbose right now.

    The check uses the configuration passed in, not a final one, so a trace
    emitted while the configuration is still being built reflects the state
    at that point.
    """
    if config.verbose:
        get_trace_logger().info(message)


def _reject_constant(name: str) -> None:
    raise ValueError(f"not a JSON value: {name}")


def is_json(text: str) -> bool:
    """Return True if *text* is one strict JSON document.

    ``NaN`` and ``Infinity`` are rejected. Numbers are not converted, so
    values such as ``1e400`` or very long integers are accepted as written.
    """
    try:
        json.loads(
            text,
            parse_float=str,
            parse_int=str,
            parse_constant=_reject_constant,
        )
    except ValueError:
        return False
    return True


def _string_end(text: str, start: int) -> int:
    """Return the index just past the string literal opening at *start*."""
    i = start + 1
    while text[i] != '"':
        i += 2 if text[i] == "\\" else 1
    return i + 1


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    return i


def reindent(text: str) -> str:
    """Lay out valid JSON *text* with four-space indentation.

    Only whitespace between tokens changes. Strings, numbers and literals are
    copied as written, member order and duplicate members are kept, and
    empty objects and arrays stay on one line. Leading whitespace is dropped
    and trailing whitespace is kept.
    """
    body = text.rstrip(_WHITESPACE)
    trailing = text[len(body):]
    parts = []
    depth = 0
    i = 0
    while i < len(body):
        ch = body[i]
        if ch in _WHITESPACE:
            i += 1
        elif ch == '"':
            end = _string_end(body, i)
            parts.append(body[i:end])
            i = end
        elif ch in "{[":
            j = _skip_whitespace(body, i + 1)
            if body[j] in "}]":
                parts.append(ch + body[j])
                i = j + 1
            else:
                depth += 1
                parts.append(ch + "\n" + " " * (INDENT * depth))
                i += 1
        elif ch in "}]":
            depth -= 1
            parts.append("\n" + " " * (INDENT * depth) + ch)
            i += 1
        elif ch == ",":
            parts.append(",\n" + " " * (INDENT * depth))
            i += 1
        elif ch == ":":
            parts.append(": ")
            i += 1
        else:
            j = i
            while j < len(body) and body[j] not in _TOKEN_END:
                j += 1
            parts.append(body[i:j])
            i = j
    return "".join(parts) + trailing


def prettify(data: bytes) -> str:
    """Re-indent a JSON body with four spaces.

    The original tokens are kept: numbers are not reformatted and duplicate
    members are not merged. Bodies that are not strict JSON (including
    ``NaN``) are returned unchanged. Bytes that are not valid UTF-8 are kept
    via ``surrogateescape`` so that writing the result to a stream using the
    same error handler reproduces the input exactly.

    Args:
        data: Raw response body.

    Returns:
        The indented JSON text, or the body itself.
    """
    text = data.decode("utf-8", errors="surrogateescape")
    if not is_json(text):
        return text
    return reindent(text)


def print_listing(items: Iterable[str], out: TextIO) -> None:
    """Print each item on its own line, in the order given."""
    for item in items:
        print(item, file=out)


def print_object(data: bytes, out: TextIO) -> None:
    """Print a pretty-printed object body followed by a newline."""
    print(prettify(data), file=out)
