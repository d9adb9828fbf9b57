"""Tests for the BDD to Gherkin converter."""

import pytest

from mcp_zephyr.utils.gherkin import convert_to_gherkin


def test_bold_markers_are_unwrapped_and_indented():
    text = "**Given** a user\n**When** they log in\n**Then** success"

    assert (
        convert_to_gherkin(text)
        == "    Given a user\n    When they log in\n    Then success"
    )


@pytest.mark.parametrize("text", ["", "not a bdd line", "\n\n   \n", "---\n----\n"])
def test_nothing_survives_returns_empty_string(text):
    assert convert_to_gherkin(text) == ""


def test_separators_and_blank_lines_are_dropped():
    text = "**Given** a cart\n\n---\n**And** an item\n   \n--- step two ---\n**Then** total is 10"

    assert convert_to_gherkin(text) == (
        "    Given a cart\n    And an item\n    Then total is 10"
    )


def test_mixed_bold_and_bare_lines_keep_order():
    text = "Given a user\n**When** they log in\nAnd they click save\n**Then** saved"

    assert convert_to_gherkin(text) == (
        "    Given a user\n    When they log in\n    And they click save\n    Then saved"
    )


def test_surrounding_whitespace_is_trimmed():
    text = "   **Given**    a padded line   \n\t When tabs lead\t"

    assert convert_to_gherkin(text) == "    Given a padded line\n    When tabs lead"


def test_marker_without_remainder_has_no_trailing_space():
    assert convert_to_gherkin("**Given**") == "    Given"
    assert convert_to_gherkin("**Then**   ") == "    Then"


def test_unrecognized_lines_are_dropped_silently():
    text = "Scenario: login\n**Given** a user\n# comment\n- bullet\n**Then** done"

    assert convert_to_gherkin(text) == "    Given a user\n    Then done"


@pytest.mark.parametrize(
    "line",
    ["xGiven foo", "the user Given foo", "Givenfoo", "given lower case", "**given** x"],
)
def test_keywords_only_match_at_line_start(line):
    assert convert_to_gherkin(line) == ""


def test_conversion_is_idempotent():
    text = "**Given** a user\nsome noise\n**When** they log in\nAnd they wait\n**Then** success"
    once = convert_to_gherkin(text)

    assert convert_to_gherkin(once) == once
    assert [line.strip() for line in once.split("\n")] == [
        "Given a user",
        "When they log in",
        "And they wait",
        "Then success",
    ]


def test_every_output_line_has_exactly_four_spaces():
    text = "**Given** a\n**When** b\n**Then** c\n**And** d"

    for line in convert_to_gherkin(text).split("\n"):
        assert line.startswith("    ")
        assert not line.startswith("     ")
        assert line.split()[0] in ("Given", "When", "Then", "And")
