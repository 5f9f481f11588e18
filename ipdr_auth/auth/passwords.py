from __future__ import annotations

import re
from dataclasses import dataclass, field

from passlib.hash import bcrypt

DEFAULT_ROUNDS = 12
MIN_REGISTRATION_SCORE = 2

_RULES = (
    (lambda value: len(value) >= 8, "Password should be at least 8 characters long"),
    (lambda value: re.search(r"[a-z]", value) is not None, "Include lowercase letters"),
    (lambda value: re.search(r"[A-Z]", value) is not None, "Include uppercase letters"),
    (lambda value: re.search(r"[0-9]", value) is not None, "Include numbers"),
    (lambda value: re.search(r"[^A-Za-z0-9]", value) is not None, "Include special characters"),
)


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    strength: str
    feedback: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"score": self.score, "strength": self.strength, "feedback": list(self.feedback)}


def _strength_label(score: int) -> str:
    if score >= 5:
        return "strong"
    if score >= 3:
        return "good"
    if score >= 2:
        return "fair"
    return "weak"


def score(password: str) -> PasswordStrength:
    """Score a candidate password 0..5, one point per satisfied rule."""
    points = 0
    feedback = []
    for check, requirement in _RULES:
        if check(password):
            points += 1
        else:
            feedback.append(requirement)
    return PasswordStrength(score=points, strength=_strength_label(points), feedback=feedback)


def is_acceptable(strength: PasswordStrength) -> bool:
    return strength.score >= MIN_REGISTRATION_SCORE


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds
        self._hasher = bcrypt.using(rounds=rounds)

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.verify(password, password_hash)
        except (TypeError, ValueError):
            return False
