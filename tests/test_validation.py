"""Local form validation."""

import pytest

from hobbyshare.errors import ValidationError
from hobbyshare.validation import (
    require,
    validate_email,
    validate_nickname,
    validate_password,
    validate_password_complexity,
    validate_password_length,
)


@pytest.mark.parametrize("password", ["Abc1234", "A" * 10 + "a" * 10 + "1"])
def test_length_bounds(password):
    assert not validate_password_length(password).is_valid


def test_length_ok():
    assert validate_password_length("Abcdefg1").is_valid
    assert validate_password_length("Ab1" + "c" * 17).is_valid


def test_whitespace_reported_before_character_classes():
    result = validate_password_complexity("abc def")
    assert not result.is_valid
    assert "whitespace" in result.message


@pytest.mark.parametrize("password", ["abcdefg1", "ABCDEFG1", "Abcdefgh"])
def test_needs_upper_lower_and_digit(password):
    assert not validate_password_complexity(password).is_valid


def test_first_failure_wins():
    assert "characters long" in validate_password("short", "other").message
    assert "match" in validate_password("Abcdefg1", "Abcdefg2").message
    assert validate_password("Abcdefg1", "Abcdefg1").is_valid


def test_email_and_nickname():
    assert validate_email("goat@example.com").is_valid
    assert not validate_email("goat@example").is_valid
    assert not validate_nickname("   ").is_valid


def test_require_raises_with_field():
    with pytest.raises(ValidationError) as exc_info:
        require(validate_nickname(""), "nickname")
    assert exc_info.value.field == "nickname"
