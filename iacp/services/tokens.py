"""Token issuance: build the claim set from the claim configuration, sign and verify."""

import re
from datetime import UTC, datetime
from typing import Any

import jwt
from sqlalchemy.orm import Session

from iacp.core.security import decode_token, encode_token
from iacp.models import ClaimConfig, User
from iacp.services.claim_config import get_claim_config
from iacp.services.errors import InvalidTokenError

EXPIRY_RE = re.compile(r"^([0-9]+)([smhd])$")

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expiry(expiry: str) -> int:
    """Turn a relative duration such as "30m", "24h" or "7d" into seconds. No upper bound."""
    match = EXPIRY_RE.match(expiry.strip()) if expiry else None
    if match is None:
        raise ValueError(f"Invalid token expiry {expiry!r}; expected <number><s|m|h|d>")
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


def build_payload(user: User, config: ClaimConfig, now: datetime | None = None) -> dict[str, Any]:
    """
    Claims for user, limited to what the configuration enables.

    sub, username and email each appear only when their flag is on; iat is
    always present.
    """
    payload: dict[str, Any] = {}
    if config.include_user_id:
        payload["sub"] = str(user.id)
    if config.include_username:
        payload["username"] = user.username
    if config.include_email:
        payload["email"] = user.email
    payload["iat"] = int((now or datetime.now(UTC)).timestamp())
    return payload


def sign(payload: dict[str, Any], expiry: str) -> str:
    """Sign payload with exp set `expiry` after its iat."""
    claims = dict(payload)
    iat = claims.setdefault("iat", int(datetime.now(UTC).timestamp()))
    claims["exp"] = iat + parse_expiry(expiry)
    return encode_token(claims)


def verify(token: str) -> dict[str, Any]:
    """Return the decoded payload; InvalidTokenError on bad signature, malformed token or expiry."""
    try:
        return decode_token(token)
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid or expired token", cause=e) from e


def issue_token(db: Session, user: User) -> str:
    """Sign a token for user according to the current claim configuration."""
    config = get_claim_config(db)
    return sign(build_payload(user, config), config.token_expiry)
