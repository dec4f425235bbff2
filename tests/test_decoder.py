"""Unit tests for the TOON decoder.

Tests cover:
- Scalars, nested objects and dedent handling
- Flat and nested array/table headers and their typing difference
- Malformed headers without an enclosing key
- Lenient handling of short bodies and unknown lines, and strict mode
"""

import io

import pytest

from toon_codec import ToonDecodeError, decode, load
from toon_codec.decoder import parse_array_header, resolve_decode_options


class TestDecodeScalars:
    """Test scalar coercion of key:value lines."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("null", None),
            ("true", True),
            ("false", False),
            ("42", 42),
            ("-3.14", -3.14),
            ("hello", "hello"),
        ],
    )
    def test_scalar_coercion(self, text, expected):
        assert decode("k:" + text) == {"k": expected}

    def test_space_after_colon(self):
        assert decode("name: Alice\nage: 30\n") == {"name": "Alice", "age": 30}

    def test_quoted_value_stays_string(self):
        assert decode('code:"42"') == {"code": "42"}

    def test_quoted_value_unescapes_quotes(self):
        assert decode('msg:"say \\"hi\\""') == {"msg": 'say "hi"'}

    def test_value_with_colon(self):
        assert decode("url: http://example.com") == {"url": "http://example.com"}

    def test_not_quite_numbers_are_strings(self):
        result = decode("a:1.\nb:.5\nc:1e5\nd:--1")
        assert result == {"a": "1.", "b": ".5", "c": "1e5", "d": "--1"}

    def test_empty_input(self):
        assert decode("") == {}

    def test_whitespace_only_input(self):
        assert decode("\n   \n") == {}


class TestDecodeObjects:
    """Test nested objects and indentation handling."""

    def test_nested_object(self):
        toon = "user:\n  id: 100\n  name: John\n"
        assert decode(toon) == {"user": {"id": 100, "name": "John"}}

    def test_dedent_returns_to_parent(self):
        toon = "a:\n  b:1\nc:2"
        assert decode(toon) == {"a": {"b": 1}, "c": 2}

    def test_deep_nesting_and_partial_dedent(self):
        toon = "a:\n  b:\n    c:1\n  d:2\ne:3"
        assert decode(toon) == {"a": {"b": {"c": 1}, "d": 2}, "e": 3}

    def test_empty_nested_object(self):
        assert decode("a:\nb:1") == {"a": {}, "b": 1}

    def test_key_order_preserved(self):
        result = decode("z:1\na:2\nm:3")
        assert list(result.keys()) == ["z", "a", "m"]

    def test_comments_and_blank_lines_skipped(self):
        toon = "# header\nuser:\n\n  # inner comment\n  id:1\n"
        assert decode(toon) == {"user": {"id": 1}}

    def test_crlf_line_endings(self):
        assert decode("user:\r\n  id:1\r\nok:true\r\n") == {"user": {"id": 1}, "ok": True}

    def test_tabs_are_not_indentation(self):
        # The tab-prefixed line has indentation 0, so it closes "user".
        assert decode("user:\n  id:1\n\tname:x") == {"user": {"id": 1}, "name": "x"}


class TestDecodeFlatArrays:
    """Test key[n]: and key[n]{fields}: headers."""

    def test_flat_primitive_array(self):
        toon = "colors[3]:\n  red\n  green\n  blue\n"
        assert decode(toon) == {"colors": ["red", "green", "blue"]}

    def test_flat_primitive_array_is_coerced(self):
        assert decode("nums[3]:\n  1\n  2.5\n  null") == {"nums": [1, 2.5, None]}

    def test_flat_tabular_rows_are_strings(self):
        toon = "users[2]{id,name}:\n  1,Alice\n  2,Bob\n"
        assert decode(toon) == {
            "users": [
                {"id": "1", "name": "Alice"},
                {"id": "2", "name": "Bob"},
            ]
        }

    def test_flat_tabular_quoted_field(self):
        toon = 'rows[1]{a,b}:\n  "x,y",2'
        assert decode(toon) == {"rows": [{"a": "x,y", "b": "2"}]}

    def test_flat_tabular_short_row_fills_none(self):
        assert decode("rows[1]{a,b}:\n  1") == {"rows": [{"a": "1", "b": None}]}

    def test_flat_tabular_extra_fields_dropped(self):
        assert decode("rows[1]{a}:\n  1,2,3") == {"rows": [{"a": "1"}]}

    def test_flat_array_inside_object(self):
        toon = "config:\n  tags[2]:\n    a\n    b\n  debug:true"
        assert decode(toon) == {"config": {"tags": ["a", "b"], "debug": True}}

    def test_zero_length_array(self):
        assert decode("items[0]:\nnext:1") == {"items": [], "next": 1}


class TestDecodeNestedArrays:
    """Test [n]: and [n]{fields}: headers under a key: line."""

    def test_nested_primitive_array(self):
        toon = "colors:\n  [3]:\n    red\n    green\n    blue"
        assert decode(toon) == {"colors": ["red", "green", "blue"]}

    def test_nested_tabular_rows_are_coerced(self):
        toon = "users:\n  [2]{id,name}:\n    1,A\n    2,B"
        assert decode(toon) == {"users": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}

    def test_nested_tabular_quoted_number_stays_string(self):
        toon = 'rows:\n  [1]{a,b}:\n    "42",42'
        assert decode(toon) == {"rows": [{"a": "42", "b": 42}]}

    def test_nested_tabular_mixed_types(self):
        toon = "rows:\n  [1]{n,f,b,s,z}:\n    -7,0.25,false,text,null"
        assert decode(toon) == {"rows": [{"n": -7, "f": 0.25, "b": False, "s": "text", "z": None}]}

    def test_sibling_after_nested_array(self):
        toon = "a:\n  [2]:\n    1\n    2\nb:3"
        assert decode(toon) == {"a": [1, 2], "b": 3}

    def test_nested_array_in_nested_object(self):
        toon = "outer:\n  inner:\n    [1]:\n      x\n  after:1"
        assert decode(toon) == {"outer": {"inner": ["x"], "after": 1}}

    def test_pipe_delimiter(self):
        toon = "rows:\n  [2]{a,b}:\n    x,y|1\n    z|2"
        result = decode(toon, {"delimiter": "pipe"})
        assert result == {"rows": [{"a": "x,y", "b": 1}, {"a": "z", "b": 2}]}


class TestDecodeMalformed:
    """Test ToonDecodeError for array headers without an enclosing key."""

    def test_root_primitive_array_header(self):
        with pytest.raises(ToonDecodeError) as exc_info:
            decode("[3]:\n  a\n  b\n  c")

        assert "must be under a key" in str(exc_info.value)
        assert "[3]:" in str(exc_info.value)
        assert exc_info.value.lineno == 1

    def test_root_tabular_array_header(self):
        with pytest.raises(ToonDecodeError):
            decode("[2]{id,name}:\n  1,A\n  2,B")

    def test_second_header_without_key(self):
        toon = "a:\n  [1]:\n    x\n  [1]:\n    y"
        with pytest.raises(ToonDecodeError) as exc_info:
            decode(toon)

        assert exc_info.value.lineno == 4

    def test_header_at_key_indentation(self):
        with pytest.raises(ToonDecodeError):
            decode("colors:\n[1]:\n  red")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode("[1]:\n  a")


class TestDecodeLenient:
    """Test best-effort handling of irregular input."""

    def test_short_array_stops_early(self):
        assert decode("colors[3]:\n  red\n") == {"colors": ["red"]}

    def test_short_table_stops_early(self):
        assert decode("rows:\n  [3]{a}:\n    1") == {"rows": [{"a": 1}]}

    def test_unrecognized_line_ignored(self):
        assert decode("name:x\n???\nmy-key: 1\nage:1") == {"name": "x", "age": 1}

    def test_body_indentation_not_checked(self):
        toon = "colors[2]:\nred\n        green"
        assert decode(toon) == {"colors": ["red", "green"]}


class TestDecodeStrict:
    """Test the opt-in strict mode."""

    def test_strict_short_array(self):
        with pytest.raises(ToonDecodeError) as exc_info:
            decode("colors[3]:\n  red", {"strict": True})

        assert "declares 3" in str(exc_info.value)

    def test_strict_unrecognized_line(self):
        with pytest.raises(ToonDecodeError) as exc_info:
            decode("name:x\n???", {"strict": True})

        assert exc_info.value.lineno == 2
        assert exc_info.value.line == "???"

    def test_strict_accepts_well_formed(self):
        toon = "users:\n  [1]{id}:\n    1\nname:x"
        assert decode(toon, {"strict": True}) == {"users": [{"id": 1}], "name": "x"}


class TestHelpers:
    """Test header parsing, option resolution and load()."""

    def test_parse_flat_table_header(self):
        assert parse_array_header("users[2]{id, name}:") == ("users", 2, ["id", "name"])

    def test_parse_nested_list_header(self):
        assert parse_array_header("[3]:") == ("", 3, None)

    @pytest.mark.parametrize("content", ["users[x]:", "users[2]", "bad-key[2]:", "users[2]{a}b:", "key:"])
    def test_parse_rejects_non_headers(self, content):
        assert parse_array_header(content) is None

    def test_resolve_defaults(self):
        resolved = resolve_decode_options(None)
        assert resolved.delimiter == ","
        assert resolved.strict is False

    def test_resolve_delimiter_key(self):
        assert resolve_decode_options({"delimiter": "tab"}).delimiter == "\t"

    def test_load_from_file_object(self):
        assert load(io.StringIO("a:1\n")) == {"a": 1}
