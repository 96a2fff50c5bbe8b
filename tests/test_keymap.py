"""Tests for keymap.py - Keyboard mapping."""

import pytest

from pocket_calc.keymap import EventKind, InputEvent, event_for_key, tokenize_keys


class TestEventForKey:
    """Tests for key name to event mapping."""

    @pytest.mark.parametrize("key", list("0123456789"))
    def test_digits(self, key):
        """Test digit keys map to digit events."""
        assert event_for_key(key) == InputEvent(EventKind.DIGIT, key)

    @pytest.mark.parametrize("key", ["+", "-", "*", "/"])
    def test_operators(self, key):
        """Test operator keys map to operator events."""
        assert event_for_key(key) == InputEvent(EventKind.OPERATOR, key)

    @pytest.mark.parametrize(
        "key,kind",
        [
            (".", EventKind.DECIMAL_POINT),
            ("Enter", EventKind.EQUALS),
            ("=", EventKind.EQUALS),
            ("Escape", EventKind.CLEAR_ALL),
            ("Backspace", EventKind.BACKSPACE),
            ("Delete", EventKind.CLEAR_ENTRY),
            ("%", EventKind.PERCENTAGE),
        ],
    )
    def test_named_keys(self, key, kind):
        """Test named keys map to their events."""
        assert event_for_key(key).kind is kind

    def test_unmapped(self):
        """Test unknown keys map to None."""
        assert event_for_key("x") is None
        assert event_for_key("Tab") is None
        assert event_for_key("12") is None


class TestTokenizeKeys:
    """Tests for splitting typed text into keys."""

    def test_characters(self):
        """Test each character is a key."""
        assert tokenize_keys("12+3=") == ["1", "2", "+", "3", "="]

    def test_named_keys_in_braces(self):
        """Test brace-wrapped names become single keys."""
        assert tokenize_keys("9{Backspace}8{Enter}") == ["9", "Backspace", "8", "Enter"]

    def test_whitespace_dropped(self):
        """Test spaces are ignored."""
        assert tokenize_keys(" 10 / 4 = ") == ["1", "0", "/", "4", "="]

    def test_unterminated_brace(self):
        """Test an unterminated name raises ValueError."""
        with pytest.raises(ValueError):
            tokenize_keys("1{Enter")
