"""Password hashing with bcrypt."""

import bcrypt

BCRYPT_COST = 12


def hash_password(password: str) -> str:
    """Return a bcrypt hash of ``password``; longer than 72 bytes raises ValueError."""
    raw = password.encode("utf-8")
    if len(raw) > 72:
        raise ValueError("password length exceeds 72 bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_COST)).decode("ascii")


def verify_password(hashed_password: str, password: str) -> bool:
    """Return True if ``password`` matches ``hashed_password``."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False