"""Password hashing and JWT signing/verification primitives."""

from typing import Any

import bcrypt
import jwt

from iacp.core.config import settings

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises on mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def encode_token(payload: dict[str, Any]) -> str:
    """Sign a fully built claims payload with the server secret."""
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT; return its payload.
    Raises jwt.PyJWTError on invalid signature, malformed token or expiry.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )
