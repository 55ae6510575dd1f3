"""Schemas for the claim configuration endpoints.

Wire names (Username, Email, UserId, tokenExpiry) are part of the public
contract and differ from the column names, hence the explicit aliases.
"""

from pydantic import BaseModel, ConfigDict, Field

from iacp.models import ClaimConfig
from iacp.schemas.common import TOKEN_EXPIRY_PATTERN


class ClaimConfigOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_username: bool = Field(..., alias="Username", description="Include username in JWT token")
    include_email: bool = Field(..., alias="Email", description="Include email in JWT token")
    include_user_id: bool = Field(..., alias="UserId", description="Include user ID in JWT token")
    token_expiry: str = Field(..., alias="tokenExpiry", description="Token expiry (e.g. 24h, 30m, 7d)")

    @classmethod
    def from_row(cls, row: ClaimConfig) -> "ClaimConfigOut":
        return cls(
            include_username=row.include_username,
            include_email=row.include_email,
            include_user_id=row.include_user_id,
            token_expiry=row.token_expiry,
        )


class ClaimConfigUpdate(BaseModel):
    """Partial update of the claim configuration; omitted fields keep their value."""

    model_config = ConfigDict(populate_by_name=True)

    include_username: bool | None = Field(default=None, alias="Username")
    include_email: bool | None = Field(default=None, alias="Email")
    include_user_id: bool | None = Field(default=None, alias="UserId")
    token_expiry: str | None = Field(
        default=None,
        alias="tokenExpiry",
        max_length=50,
        pattern=TOKEN_EXPIRY_PATTERN,
    )

    def changes(self) -> dict[str, bool | str]:
        """Column values the caller supplied, keyed by column name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ClaimConfigUpdateResponse(BaseModel):
    message: str
    config: ClaimConfigOut
