"""Credential rule tests."""

import pytest

from utils.credentials import check_user_name, evaluate_password, generate_password


@pytest.mark.parametrize(
    "user_name, expected",
    [
        ("Alice", ""),
        ("a.b-c_d", ""),
        ("", "The username is empty!\n"),
        ("1abc", "Must start with A-Z, a-z.\n"),
        ("abc", "Must be at least 4 characters.\n"),
        ("abcdefghijklmnopq", "Must have no more than 16 characters.\n"),
        ("abcd$e", "May contain only the characters A-Z, a-z, 0-9.\n"),
        ("abc..d", "Special character must be followed by A-Z, a-z, 0-9.\n"),
        ("abcd.", "Special character must be followed by A-Z, a-z, 0-9.\n"),
    ],
)
def test_check_user_name(user_name, expected):
    assert check_user_name(user_name) == expected


def test_valid_password():
    assert evaluate_password("Abcdef1!") == ""


def test_empty_password():
    assert evaluate_password("") == "The password is empty!"


def test_password_reports_every_unmet_rule():
    message = evaluate_password("abc")

    assert "Must contain a uppercase letter.\n" in message
    assert "Must contain a number.\n" in message
    assert "Must contain a special character.\n" in message
    assert "Must be at least 8 characters.\n" in message
    assert "lowercase" not in message


def test_password_invalid_character_position():
    assert evaluate_password("Abcdef1! ") == "9th character is an invalid character.\n"
    assert evaluate_password("éAbcdef1!") == "1st character is an invalid character.\n"


def test_generated_password_passes_rules():
    for _ in range(20):
        password = generate_password()
        assert len(password) == 15
        assert evaluate_password(password) == ""


def test_generated_password_too_short():
    with pytest.raises(ValueError):
        generate_password(3)
