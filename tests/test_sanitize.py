"""Tests for the input sanitizer."""

import re
import pytest
from sharpchoice.utils.sanitize import parse_number, sanitize, sanitize_mapping


def test_sanitize_trims_whitespace():
    assert sanitize("  hello world \n") == "hello world"


def test_sanitize_escapes_script_tags():
    result = sanitize('<script>alert("x")</script>')

    assert "<script" not in result
    assert not re.search(r"<\s*\w", result)
    assert result == "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;"


def test_sanitize_escapes_quotes_and_ampersands():
    assert sanitize("Tom & Jerry's \"house\"") == "Tom &amp; Jerry&#x27;s &quot;house&quot;"


@pytest.mark.parametrize("value", [None, 0, 4.5, True, ["<b>"], {"a": 1}])
def test_sanitize_passes_non_strings_through(value):
    assert sanitize(value) is value


def test_sanitize_mapping():
    assert sanitize_mapping({" <k> ": " <v> ", "n": 3}) == {"&lt;k&gt;": "&lt;v&gt;", "n": 3}


def test_sanitize_mapping_scalars():
    assert sanitize_mapping(3) == 3
    assert sanitize_mapping(None) is None
    assert sanitize_mapping(" <a> ") == "&lt;a&gt;"


def test_sanitize_mapping_walks_nested_values():
    metadata = {"features": {"note": "<script>x</script>"}, "rooms": ["<b>Den</b>", 2], "n": None}

    assert sanitize_mapping(metadata) == {
        "features": {"note": "&lt;script&gt;x&lt;/script&gt;"},
        "rooms": ["&lt;b&gt;Den&lt;/b&gt;", 2],
        "n": None,
    }


@pytest.mark.parametrize("value,expected", [("4", 4), (" 2.5 ", 2.5), ("abc", "abc"), (3, 3), (True, True)])
def test_parse_number(value, expected):
    result = parse_number(value)

    assert result == expected
    assert type(result) is type(expected)
