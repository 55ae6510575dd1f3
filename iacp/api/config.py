"""Claim configuration endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from iacp.api.auth import require_token
from iacp.core.database import get_db
from iacp.schemas.config import ClaimConfigOut, ClaimConfigUpdate, ClaimConfigUpdateResponse
from iacp.services.claim_config import get_claim_config, update_claim_config

router = APIRouter()


@router.get("/claims", response_model=ClaimConfigOut)
def get_claims(db: Annotated[Session, Depends(get_db)]) -> ClaimConfigOut:
    """Current claim configuration (public)."""
    return ClaimConfigOut.from_row(get_claim_config(db))


@router.post("/claims", response_model=ClaimConfigUpdateResponse)
def post_claims(
    body: ClaimConfigUpdate,
    db: Annotated[Session, Depends(get_db)],
    _claims: Annotated[dict[str, Any], Depends(require_token)],
) -> ClaimConfigUpdateResponse:
    """
    Change which claims newly issued tokens carry and how long they live.
    Omitted fields keep their current value. Tokens already issued are unaffected.
    """
    row = update_claim_config(db, body)
    return ClaimConfigUpdateResponse(
        message="Claim configuration updated",
        config=ClaimConfigOut.from_row(row),
    )
