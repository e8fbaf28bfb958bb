"""
Local form validation. Runs synchronously and never reaches the network.
"""

import re
from dataclasses import dataclass
from typing import Optional

from hobbyshare.errors import ValidationError

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: Optional[str] = None


OK = ValidationResult(True)


def validate_password_length(password: str) -> ValidationResult:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return ValidationResult(False, f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters long.")
    return OK


def validate_password_complexity(password: str) -> ValidationResult:
    # Whitespace is checked first so it gets its own message.
    if re.search(r"\s", password):
        return ValidationResult(False, "Password must not contain whitespace.")
    if not (re.search(r"[A-Z]", password) and re.search(r"[a-z]", password) and re.search(r"[0-9]", password)):
        return ValidationResult(False, "Password must contain an uppercase letter, a lowercase letter and a digit.")
    return OK


def validate_password_match(password: str, confirm: str) -> ValidationResult:
    if password != confirm:
        return ValidationResult(False, "Passwords do not match.")
    return OK


def validate_password(password: str, confirm: str) -> ValidationResult:
    for result in (
        validate_password_length(password),
        validate_password_complexity(password),
        validate_password_match(password, confirm),
    ):
        if not result.is_valid:
            return result
    return OK


def validate_email(email: str) -> ValidationResult:
    if not EMAIL_RE.match(email):
        return ValidationResult(False, "Invalid email address.")
    return OK


def validate_nickname(nickname: str) -> ValidationResult:
    if not nickname.strip():
        return ValidationResult(False, "Nickname is required.")
    return OK


def require(result: ValidationResult, field: str) -> None:
    """Raise ValidationError for a failed result."""
    if not result.is_valid:
        raise ValidationError(result.message or "Invalid value", field=field)
