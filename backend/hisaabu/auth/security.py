import re
from dataclasses import dataclass

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)

PASSWORD_RULES = (
    (lambda p: len(p) >= 8, "Password must be at least 8 characters long"),
    (lambda p: re.search(r"[A-Z]", p) is not None, "Password must contain at least one uppercase letter"),
    (lambda p: re.search(r"[a-z]", p) is not None, "Password must contain at least one lowercase letter"),
    (lambda p: re.search(r"[0-9]", p) is not None, "Password must contain at least one number"),
)


@dataclass(frozen=True)
class PasswordStrength:
    valid: bool
    reason: str | None = None


def _ensure_bcrypt_limit(password: str) -> None:
    # bcrypt limit is 72 BYTES, not characters
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password too long (max 72 bytes).")


def hash_password(password: str) -> str:
    _ensure_bcrypt_limit(password)
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _ensure_bcrypt_limit(password)
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # over-long input or a hash passlib cannot identify
        return False


def assess_password_strength(password: str | None) -> PasswordStrength:
    """Check the password rules in order; the first one that fails wins."""
    password = password or ""
    for check, reason in PASSWORD_RULES:
        if not check(password):
            return PasswordStrength(valid=False, reason=reason)
    return PasswordStrength(valid=True)


__all__ = [
    "BCRYPT_ROUNDS",
    "PasswordStrength",
    "assess_password_strength",
    "hash_password",
    "verify_password",
]
