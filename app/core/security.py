"""Security primitives for password workflows."""

from __future__ import annotations

import hashlib
import hmac
import secrets

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 260_000


def _derive(password: str, salt: str, iterations: int, pepper: str) -> str:
    value = f"{pepper}:{password}".encode("utf-8")
    digest = hashlib.pbkdf2_hmac("sha256", value, salt.encode("utf-8"), iterations)
    return digest.hex()


def hash_password(password: str, pepper: str = "", iterations: int = PBKDF2_ITERATIONS) -> str:
    """Return a salted PBKDF2 hash in ``algorithm$iterations$salt$digest`` form."""
    salt = secrets.token_hex(16)
    digest = _derive(password, salt=salt, iterations=iterations, pepper=pepper)
    return f"{PBKDF2_ALGORITHM}${iterations}${salt}${digest}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time comparison for hashed password values."""
    try:
        algorithm, iterations, salt, expected = hashed_password.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False
    candidate = _derive(password, salt=salt, iterations=rounds, pepper=pepper)
    return hmac.compare_digest(candidate, expected)
