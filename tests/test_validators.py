from __future__ import annotations

import pytest

from app.utils.validators import is_valid_email, like_pattern, normalize_email, sanitize_text


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"


def test_sanitize_text_handles_none_and_truncates():
    assert sanitize_text(None) == ""
    assert sanitize_text("abcdef", max_len=3) == "abc"


def test_normalize_email_lowercases():
    assert normalize_email("  Casey@Example.COM ") == "casey@example.com"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("casey@example.com", True),
        ("Casey.Doe+portal@studio.co", True),
        ("casey@", False),
        ("not an email", False),
        (None, False),
    ],
)
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off") == "%50\\%\\_off%"
    assert like_pattern("a\\b") == "%a\\\\b%"
