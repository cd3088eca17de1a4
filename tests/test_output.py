"""Tests for the presentation helpers."""

import io
import json

from clerc.config import ClercConfig
from clerc.output import prettify, print_listing, print_object, trace


class TestPrettify:
    """Tests for prettify()."""

    def test_indents_with_four_spaces(self):
        assert prettify(b'{"a":1,"b":[1,2]}') == '{\n    "a": 1,\n    "b": [\n        1,\n        2\n    ]\n}'

    def test_preserves_key_order(self):
        """Keys come out in the order the server sent them, not sorted."""
        assert prettify(b'{"z":1,"a":2}').splitlines()[1:3] == ['    "z": 1,', '    "a": 2']

    def test_keeps_non_ascii_text(self):
        assert prettify('{"name":"Žluťoučký"}'.encode()) == '{\n    "name": "Žluťoučký"\n}'

    def test_idempotent_on_indented_json(self):
        """Re-indenting already indented output yields the same text."""
        minified = b'{"user":{"name":"Alice","tags":["a","b"]},"n":null}'
        once = prettify(minified)
        assert prettify(once.encode()) == once

    def test_scalar_json(self):
        assert prettify(b"42") == "42"
        assert prettify(b'"hello"') == '"hello"'

    def test_non_json_returned_unchanged(self):
        assert prettify(b"plain text, not json") == "plain text, not json"

    def test_truncated_json_returned_unchanged(self):
        assert prettify(b'{"a": 1') == '{"a": 1'

    def test_empty_body(self):
        assert prettify(b"") == ""

    def test_number_text_kept(self):
        """Numbers are copied as written, with no rounding or reformatting."""
        assert prettify(b'{"price":1.10}') == '{\n    "price": 1.10\n}'
        assert prettify(b"[0.12345678901234567890,-0,1E+2]") == (
            "[\n    0.12345678901234567890,\n    -0,\n    1E+2\n]"
        )

    def test_out_of_range_number_kept(self):
        assert prettify(b'{"big":1e400}') == '{\n    "big": 1e400\n}'

    def test_long_integer_kept(self):
        digits = "9" * 5000
        assert prettify(f"[{digits}]".encode()) == f"[\n    {digits}\n]"

    def test_duplicate_members_kept(self):
        assert prettify(b'{"a":1,"a":2}') == '{\n    "a": 1,\n    "a": 2\n}'

    def test_nan_is_not_json(self):
        assert prettify(b'{"a":NaN}') == '{"a":NaN}'
        assert prettify(b"Infinity") == "Infinity"

    def test_string_escapes_kept(self):
        body = r'{"s":"a\"b\\cŽ, [x]: {y}"}'
        assert prettify(body.encode()) == '{\n    "s": ' + body[5:-1] + "\n}"

    def test_empty_containers_stay_inline(self):
        assert prettify(b'{"a": { }, "b":[\n]}') == '{\n    "a": {},\n    "b": []\n}'

    def test_whitespace_between_tokens_replaced(self):
        assert prettify(b'  {\t"a" :\r\n 1 }') == '{\n    "a": 1\n}'

    def test_trailing_newline_kept(self):
        assert prettify(b'{"a":1}\n') == '{\n    "a": 1\n}\n'

    def test_invalid_utf8_round_trips(self):
        """Bytes that are not UTF-8 survive a surrogateescape write unchanged."""
        data = b"\xff\xfe binary \x00 data"
        text = prettify(data)
        assert text.encode("utf-8", errors="surrogateescape") == data


class TestPrintListing:
    """Tests for print_listing()."""

    def test_one_item_per_line_in_order(self):
        out = io.StringIO()
        print_listing(["b3", "b1", "b2"], out)
        assert out.getvalue() == "b3\nb1\nb2\n"

    def test_empty_listing_prints_nothing(self):
        out = io.StringIO()
        print_listing([], out)
        assert out.getvalue() == ""


class TestPrintObject:
    """Tests for print_object()."""

    def test_pretty_json_with_trailing_newline(self):
        out = io.StringIO()
        print_object(json.dumps({"k": "v"}).encode(), out)
        assert out.getvalue() == '{\n    "k": "v"\n}\n'

    def test_raw_fallback(self):
        out = io.StringIO()
        print_object(b"<html>", out)
        assert out.getvalue() == "<html>\n"


class TestTrace:
    """Tests for trace()."""

    def test_prefixed_when_verbose(self, capsys):
        trace(ClercConfig(verbose=True), "Making request: http://x/buckets")
        assert capsys.readouterr().out == "*** Making request: http://x/buckets\n"

    def test_silent_when_not_verbose(self, capsys):
        trace(ClercConfig(), "hidden")
        assert capsys.readouterr().out == ""

    def test_checks_config_at_call_time(self, capsys):
        """Only calls made while the passed configuration is verbose print."""
        quiet = ClercConfig()
        loud = quiet.model_copy(update={"verbose": True})
        trace(quiet, "first")
        trace(loud, "second")
        assert capsys.readouterr().out == "*** second\n"
