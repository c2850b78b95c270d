"""Tests for the key adapter: key names to engine commands."""

import pytest

from keycalc.keymap import KeyAdapter, binding_table, tokenize


@pytest.fixture
def adapter():
    return KeyAdapter()


def final(adapter, keys):
    adapter.feed(keys)
    return adapter.calculator.display()


# --- Tokenizing ---

def test_tokenize_single_characters():
    assert list(tokenize("12+3=")) == ["1", "2", "+", "3", "="]


def test_tokenize_named_keys():
    assert list(tokenize("9<Backspace>8<Enter>")) == ["9", "Backspace", "8", "Enter"]


def test_tokenize_skips_whitespace():
    assert list(tokenize(" 1 + 2 ")) == ["1", "+", "2"]


# --- Key bindings ---

def test_chaining_sequence(adapter):
    display = final(adapter, "5+3*2=")
    assert display.value == "16"
    assert display.expression == "5 + 3 × 2 ="


@pytest.mark.parametrize("keys, expected", [
    ("9-4<Enter>", "5"),
    ("2^5=", "32"),
    ("7/2=", "3.5"),
    ("25r", "5"),
    ("12<Backspace>", "1"),
    ("7_", "-7"),
    ("7__", "7"),
])
def test_key_sequences(adapter, keys, expected):
    assert final(adapter, keys).value == expected


@pytest.mark.parametrize("clear_key", ["c", "<Escape>", "<Delete>"])
def test_clear_keys(adapter, clear_key):
    display = final(adapter, f"5+3{clear_key}")
    assert display.value == "0"
    assert display.expression == ""
    assert adapter.calculator.state.operation is None


def test_second_decimal_point_is_suppressed(adapter):
    assert final(adapter, "1.2.3").value == "1.23"


def test_decimal_point_after_operator_starts_fraction(adapter):
    assert final(adapter, "2+.5=").value == "2.5"


def test_decimal_guard_reads_displayed_value(adapter):
    """Right after an operator the display still shows the old operand."""
    assert final(adapter, "1.5+.5=").value == "6.5"


def test_division_by_zero_message(adapter):
    display = final(adapter, "5/0=")
    assert display.error == "Cannot divide by zero"
    assert display.value == "0"


def test_negative_root_message(adapter):
    assert final(adapter, "4_r").error == "Negative number under root"


def test_unknown_key_is_ignored(adapter):
    adapter.feed("42")
    before = adapter.calculator.state
    assert adapter.press("x").value == "42"
    assert adapter.press("F5").value == "42"
    assert adapter.calculator.state == before


def test_feed_returns_each_step(adapter):
    steps = adapter.feed("2+2=")
    assert [key for key, _ in steps] == ["2", "+", "2", "="]
    assert [d.value for _, d in steps] == ["2", "2", "2", "4"]


def test_binding_table_lists_every_action():
    actions = {action for _, action in binding_table()}
    assert {"digit", "add", "subtract", "multiply", "divide", "power", "sqrt",
            "equals", "clear", "backspace", "sign"} <= actions
