"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field, field_validator

from src.domain.ports import OfferState

MAX_OFFER_PRICE = 2**128 - 1
MAX_DOMAIN_ID = 2**31 - 1
MIN_DOMAIN_ID = -(2**31)


class ClaimRequest(BaseModel):
    """Request model for claiming a name."""

    name: str = Field(..., description="Name to claim")
    offer_state: OfferState = Field(OfferState.NOT_OFFERING, description="Offer status")
    offer_price: int = Field(
        0, ge=0, le=MAX_OFFER_PRICE, description="Offer price (unsigned 128-bit)"
    )


class ClaimResponse(BaseModel):
    """Response model for a successful claim."""

    message: str
    domain_id: int


class TransferRequest(BaseModel):
    """Request model for ownership transfer."""

    new_holder: str = Field(..., min_length=1, description="Identity of the new holder")

    @field_validator("new_holder")
    @classmethod
    def strip_new_holder(cls, value: str) -> str:
        """Strip surrounding whitespace the same way the caller header is stripped."""
        value = value.strip()
        if not value:
            raise ValueError("new_holder must not be blank")
        return value


class TransferResponse(BaseModel):
    """Response model for a successful transfer."""

    message: str
    domain_id: int
    new_holder: str


class DomainRecordResponse(BaseModel):
    """Serialized domain record."""

    domain_id: int
    name: str
    offer_state: OfferState
    offer_price: int
    holder: str


class ClaimedResponse(BaseModel):
    """Claim flag for one domain ID."""

    domain_id: int
    claimed: bool


class HoldingCountResponse(BaseModel):
    """Holding count for one identity."""

    identity: str
    count: int


class RegistryInfoResponse(BaseModel):
    """Registry-wide information."""

    administrative_owner: str
    total_claimed: int


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
