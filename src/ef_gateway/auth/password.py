"""Password hashing utilities using bcrypt.

Uses the ``bcrypt`` library directly (>=4.0). Hashes use cost factor 12;
``checkpw`` also accepts the ``$2a$`` hashes produced by bcryptjs.
"""

import bcrypt

MIN_PASSWORD_LENGTH = 6
_BCRYPT_ROUNDS = 12


def hash_password(plain: str) -> str:
    """Hash a plain-text password. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(_BCRYPT_ROUNDS))
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plain-text password against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
