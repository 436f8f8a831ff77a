"""Password policy, hashing and verification."""

from __future__ import annotations

import re

import bcrypt

from giving_server.core.errors import ValidationError

MIN_PASSWORD_LENGTH = 8

_LETTER = re.compile(r"[a-zA-Z]")
_DIGIT = re.compile(r"\d")


def check_password_policy(password: str, field: str = "password") -> None:
    """Reject passwords shorter than eight characters or missing a letter or digit."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be {MIN_PASSWORD_LENGTH} characters", field)
    if not _LETTER.search(password):
        raise ValidationError("Password is missing a letter", field)
    if not _DIGIT.search(password):
        raise ValidationError("Password is missing a number", field)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash; malformed hashes never match."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["MIN_PASSWORD_LENGTH", "check_password_policy", "hash_password", "verify_password"]
