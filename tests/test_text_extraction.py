import pytest

from conftest import adf
from domains.jira.continuity.text_extraction import extract_text, process_adf_block, stringify_text_value


def test_plain_string_is_returned_unchanged():
    assert extract_text("  keep my spaces  ") == "  keep my spaces  "


@pytest.mark.parametrize("body", [None, 42, True, [], {}, {"content": "not a list"}])
def test_unrecognized_bodies_degrade_to_empty_string(body):
    assert extract_text(body) == ""


def test_blocks_are_joined_with_single_space_and_trimmed():
    assert extract_text(adf("Hello", "world")) == "Hello world"


def test_items_within_a_block_are_joined_with_spaces():
    body = {"content": [{"type": "paragraph", "content": [{"text": "Hello"}, {"text": "there"}]}]}

    assert extract_text(body) == "Hello there"


def test_only_outer_join_is_trimmed():
    body = {
        "content": [
            {"type": "rule"},
            {"content": [{"text": "a"}, {"text": None}, {"text": "b"}]},
            {"content": []},
        ]
    }

    assert extract_text(body) == "a  b"


def test_block_without_content_yields_empty_string():
    assert process_adf_block({"type": "rule"}) == ""
    assert process_adf_block("not a block") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (False, "false"),
        (True, "true"),
        (123, "123"),
        (1.0, "1"),
        (2.5, "2.5"),
        (None, ""),
    ],
)
def test_text_values_are_stringified_without_losing_falsy_values(value, expected):
    assert stringify_text_value(value) == expected


def test_numeric_and_boolean_items_survive_extraction():
    body = {"content": [{"content": [{"text": 0}, {"text": False}, {"text": "ok"}]}]}

    assert extract_text(body) == "0 false ok"


def test_items_without_text_field_are_empty():
    body = {"content": [{"content": [{"type": "hardBreak"}, {"text": "after"}]}]}

    assert extract_text(body) == "after"
