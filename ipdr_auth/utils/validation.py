from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")

EMAIL_ERROR = "Invalid email format"
USERNAME_ERROR = "Username must be 3-20 characters, alphanumeric with underscores"


@dataclass(frozen=True)
class ValidationResult:
    passed: bool
    errors: Sequence[str]

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None


def validate_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_username(username: str) -> bool:
    return USERNAME_PATTERN.fullmatch(username) is not None


def validate_registration(username: str, email: str) -> ValidationResult:
    errors = []
    if not validate_email(email):
        errors.append(EMAIL_ERROR)
    if not validate_username(username):
        errors.append(USERNAME_ERROR)
    return ValidationResult(passed=len(errors) == 0, errors=tuple(errors))
