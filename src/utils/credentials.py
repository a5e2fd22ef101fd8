"""Account credential rules.

User name and password checks used before an account is registered, and the
one-time password generator admins use when resetting a password. Checks
return an empty string when the input is acceptable and a human-readable
message otherwise.
"""

import secrets
import string

from config import TEMP_PASSWORD_LENGTH

USER_NAME_MIN_LENGTH = 4
USER_NAME_MAX_LENGTH = 16
USER_NAME_SPECIALS = ".-_"

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIALS = "~`!@#$%^&*()_-+{}[]|:,.?/"


def check_user_name(user_name: str) -> str:
    """Validate a user name.

    A user name starts with a letter, holds letters, digits and the
    separators ``.``, ``-`` and ``_``, never ends on or doubles a separator,
    and is 4 to 16 characters long.
    """
    if not user_name:
        return "The username is empty!\n"
    if not (user_name[0].isascii() and user_name[0].isalpha()):
        return "Must start with A-Z, a-z.\n"

    after_special = False
    size = 1
    stopped = False
    for char in user_name[1:]:
        if char.isascii() and char.isalnum():
            next_after_special = False
        elif char in USER_NAME_SPECIALS and not after_special:
            next_after_special = True
        else:
            stopped = True
            break
        size += 1
        if size > USER_NAME_MAX_LENGTH:
            break
        after_special = next_after_special

    if after_special:
        return "Special character must be followed by A-Z, a-z, 0-9.\n"
    if size < USER_NAME_MIN_LENGTH:
        return f"Must be at least {USER_NAME_MIN_LENGTH} characters.\n"
    if size > USER_NAME_MAX_LENGTH:
        return f"Must have no more than {USER_NAME_MAX_LENGTH} characters.\n"
    if stopped:
        return "May contain only the characters A-Z, a-z, 0-9.\n"
    return ""


def evaluate_password(password: str) -> str:
    """Validate a password.

    A password needs an upper case letter, a lower case letter, a digit, a
    special character and at least 8 characters. Each unmet rule adds one
    line to the message; the last invalid character is reported by position.
    """
    if not password:
        return "The password is empty!"

    invalid_position = 0
    for index, char in enumerate(password, start=1):
        if not (char.isascii() and (char.isalnum() or char in PASSWORD_SPECIALS)):
            invalid_position = index

    message = ""
    if not any(c.isascii() and c.isupper() for c in password):
        message += "Must contain a uppercase letter.\n"
    if not any(c.isascii() and c.islower() for c in password):
        message += "Must contain a lowercase letter.\n"
    if not any(c.isascii() and c.isdigit() for c in password):
        message += "Must contain a number.\n"
    if not any(c in PASSWORD_SPECIALS for c in password):
        message += "Must contain a special character.\n"
    if len(password) < PASSWORD_MIN_LENGTH:
        message += f"Must be at least {PASSWORD_MIN_LENGTH} characters.\n"
    if invalid_position:
        message += (
            f"{invalid_position}{_ordinal_suffix(invalid_position)} character"
            " is an invalid character.\n"
        )
    return message


def _ordinal_suffix(number: int) -> str:
    return {1: "st", 2: "nd", 3: "rd"}.get(number, "th")


def generate_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    """Generate a random one-time password.

    The result holds at least one upper case letter, lower case letter,
    digit and special character.

    Raises:
        ValueError: If ``length`` is below 4.
    """
    pools = [
        string.ascii_uppercase,
        string.ascii_lowercase,
        string.digits,
        PASSWORD_SPECIALS,
    ]
    if length < len(pools):
        raise ValueError(f"Password length must be at least {len(pools)}")

    everything = "".join(pools)
    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(everything) for _ in range(length - len(pools))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
