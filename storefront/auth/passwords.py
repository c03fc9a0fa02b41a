"""
Password hashing and credential policy.

Passwords are stored as bcrypt hashes. The plaintext is first reduced
with SHA-256 so that bcrypt's 72-byte input limit never truncates or
rejects a long password.
"""
import base64
import hashlib
import re
import uuid
from typing import List, NamedTuple

import bcrypt

BCRYPT_ROUNDS = 10
USER_ID_PREFIX = "user_"

PASSWORD_MIN_LENGTH = 8
PASSWORD_TOO_SHORT = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
PASSWORD_NO_UPPERCASE = "Password must contain at least one uppercase letter"
PASSWORD_NO_DIGIT = "Password must contain at least one number"

_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")


class PasswordCheck(NamedTuple):
    """Outcome of a password policy check."""
    valid: bool
    errors: List[str]


def _prehash(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """Generate a salted bcrypt hash for a password."""
    return bcrypt.hashpw(
        _prehash(password),
        bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_prehash(password), hashed_password.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def validate_email(email: str) -> bool:
    """
    Structural email check: one "@", non-empty local part, a dot somewhere
    in the domain with characters on both sides, and no whitespace. Only
    obviously malformed addresses are rejected.
    """
    if not isinstance(email, str):
        return False
    return _EMAIL.fullmatch(email) is not None


def validate_password(password: str) -> PasswordCheck:
    """
    Check a password against every policy rule.

    All violations are reported, in the order length, uppercase, digit.
    """
    errors = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(PASSWORD_TOO_SHORT)
    if not _UPPERCASE.search(password):
        errors.append(PASSWORD_NO_UPPERCASE)
    if not _DIGIT.search(password):
        errors.append(PASSWORD_NO_DIGIT)
    return PasswordCheck(valid=not errors, errors=errors)


def generate_user_id() -> str:
    """Fresh user id, distinguishable from product ids by its prefix."""
    return f"{USER_ID_PREFIX}{uuid.uuid4()}"
