"""Register, login, current-user and token decode endpoints, plus the bearer dependency."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from iacp.core.database import get_db
from iacp.schemas.auth import (
    AuthResponse,
    DecodeRequest,
    DecodeResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
)
from iacp.schemas.common import ErrorResponse
from iacp.schemas.roles import ApplicationWithRoles
from iacp.schemas.users import UserCreate, UserOut
from iacp.services import authorization, tokens, users
from iacp.services.errors import InvalidTokenError

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def require_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict[str, Any]:
    """
    Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid.

    Only the signature and expiry are checked; tokens issued while the
    claim configuration omits sub are still accepted.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return tokens.verify(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post("/register", response_model=AuthResponse)
def register(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account and return a token shaped by the current claim configuration."""
    user = users.register(db, body.username, str(body.email), body.phone, body.password)
    token = tokens.issue_token(db, user)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email, phone and password; returns a JWT plus the
    user's applications and their roles.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = users.authenticate(db, str(body.email), body.phone, body.password)
    token = tokens.issue_token(db, user)
    applications = authorization.applications_and_roles_for_user(db, user.id)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserOut.model_validate(user),
        applications=[ApplicationWithRoles.from_pair(a, roles) for a, roles in applications],
    )


@router.get("/me", response_model=MeResponse)
def me(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Resolve the bearer token to a user, by sub when present, otherwise by email."""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise invalid
    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidTokenError:
        raise invalid

    user = None
    sub = claims.get("sub")
    email = claims.get("email")
    if sub:
        try:
            user = users.get_user(db, int(sub))
        except (TypeError, ValueError):
            raise invalid
    elif email:
        user = users.find_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MeResponse(user=UserOut.model_validate(user), claims=claims)


@router.post(
    "/decode",
    response_model=DecodeResponse,
    responses={401: {"model": ErrorResponse}},
)
def decode(body: DecodeRequest):
    """Verify a token and return its claims (debugging aid; no authentication required)."""
    try:
        return DecodeResponse(decoded=tokens.verify(body.token))
    except InvalidTokenError as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Invalid token", "details": str(e.cause or e.message)},
        )
