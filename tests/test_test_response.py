"""Tests for TestResponse."""

import pytest
from smart_webdriver.exceptions import AssertionFailedError
from smart_webdriver.test_response import TestResponse


def test_default_response_passes():
    """A fresh response passes with no messages."""
    response = TestResponse()

    assert response.pass_fail_result is True
    assert response.messages == []
    assert response.messages_text == ""
    assert bool(response) is True


def test_failed_result_keeps_message():
    """A failing bool keeps its message, a passing one drops it."""
    assert TestResponse(False, "logo missing").messages == ["logo missing"]
    assert TestResponse(True, "logo missing").messages == []


def test_equal_strings_ignore_surrounding_whitespace():
    """Strings are compared after stripping."""
    assert TestResponse.equal("  Welcome ", "Welcome", "header").pass_fail_result


def test_equal_strings_treat_none_as_empty():
    """None compares equal to an empty string."""
    assert TestResponse.equal(None, "", "header").pass_fail_result


def test_equal_strings_mismatch_message():
    """Mismatched strings describe both values, then the caller's message."""
    response = TestResponse.equal("Welcome", "Goodbye", "Header text")

    assert response.pass_fail_result is False
    assert response.messages == [
        "The two string arguments didn't match, expected: Welcome, got: Goodbye",
        "Header text",
    ]


def test_equal_ints_and_bools():
    """Ints and bools use their own labels."""
    assert TestResponse.equal(3, 3, "count").pass_fail_result
    assert TestResponse.equal(3, 4, "count").messages[0].startswith("The two int arguments")
    assert TestResponse.equal(True, False, "flag").messages[0] == (
        "The two bool arguments didn't match, expected: True, got: False"
    )


def test_equal_doubles_use_tolerance():
    """Floats within 0.001 of each other are equal."""
    assert TestResponse.equal(1.0, 1.0005, "price").pass_fail_result
    response = TestResponse.equal(1.0, 1.01, "price")
    assert not response.pass_fail_result
    assert response.messages[0].startswith("The two double arguments")


def test_equal_double_against_text_compares_as_strings():
    """A float compared with text or None falls back to the string comparison."""
    assert TestResponse.equal(1.5, "1.5", "price").pass_fail_result

    response = TestResponse.equal(1.5, None, "price")
    assert not response.pass_fail_result
    assert response.messages == ["The two string arguments didn't match, expected: 1.5, got: ", "price"]


def test_add_accumulates_failure_messages():
    """Every failed check contributes its messages."""
    response = TestResponse()

    assert response.add(True, "never shown") is True
    assert response.add(False, "first failure") is False
    assert response.add_equal("a", "b", "second failure") is False

    assert response.pass_fail_result is False
    assert response.messages == [
        "first failure",
        "The two string arguments didn't match, expected: a, got: b",
        "second failure",
    ]
    assert response.messages_text == "first failure\nThe two string arguments didn't match, expected: a, got: b\nsecond failure"


def test_add_passing_check_after_failure_stays_failed():
    """A later passing check neither clears the failure nor adds messages."""
    response = TestResponse(False, "broken")

    assert response.add(TestResponse()) is False
    assert response.messages == ["broken"]


def test_assert_is_true():
    """assert_is_true raises with the collected messages."""
    TestResponse().assert_is_true("should not raise")

    response = TestResponse(False, "logo missing")
    with pytest.raises(AssertionFailedError) as excinfo:
        response.assert_is_true("Homepage checks failed")

    assert str(excinfo.value) == (
        "Homepage checks failed.\nExpected true, but got false.\nThe error messages returned are:\nlogo missing"
    )
    assert isinstance(excinfo.value, AssertionError)


def test_assert_is_false():
    """assert_is_false raises when everything passed."""
    TestResponse(False, "expected failure").assert_is_false("should not raise")

    with pytest.raises(AssertionFailedError, match="Expected false, but got true"):
        TestResponse().assert_is_false("Error banner should be missing")
