"""Password hashing using bcrypt."""

from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 10
# bcrypt ignores everything past 72 bytes; newer releases reject longer input
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash password with a fresh salt at the given cost factor."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash compared against when the user does not exist, at the same cost
    factor as real hashes so both paths take the same time.
    """
    return hash_password(bcrypt.gensalt().decode("ascii"), rounds)
