"""
API v1 routes.

Defines REST endpoints for the name registry API.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from src.api.dependencies import get_caller_context, get_registry_service
from src.api.models import (
    MAX_DOMAIN_ID,
    MIN_DOMAIN_ID,
    ClaimedResponse,
    ClaimRequest,
    ClaimResponse,
    DomainRecordResponse,
    ErrorResponse,
    HoldingCountResponse,
    RegistryInfoResponse,
    TransferRequest,
    TransferResponse,
)
from src.domain.exceptions import DomainAlreadyOwned, NameAlreadyClaimed, NotAOwner, SameOwner
from src.domain.records import CallerContext
from src.domain.service import RegistryService

router = APIRouter(tags=["v1"])

DomainId = Annotated[int, Path(ge=MIN_DOMAIN_ID, le=MAX_DOMAIN_ID, description="Domain ID")]


@router.post(
    "/domains",
    response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Missing caller identity"},
        409: {"model": ErrorResponse, "description": "Name already owned"},
        422: {"description": "Validation error"},
    },
    summary="Claim a name",
    description="Claim a unique name for the calling identity, "
    "recording its offer state and offer price.",
)
async def claim(
    request_data: ClaimRequest,
    caller: CallerContext = Depends(get_caller_context),
    service: RegistryService = Depends(get_registry_service),
) -> ClaimResponse:
    """
    Claim a name.

    - **name**: Name to claim
    - **offer_state**: NotOffering, PrivateOffering or PublicOffering
    - **offer_price**: Unsigned 128-bit offer price
    """
    try:
        domain_id = service.claim(
            request_data.name,
            request_data.offer_state,
            request_data.offer_price,
            caller,
        )
    except DomainAlreadyOwned:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Domain already owned",
        ) from None
    except NameAlreadyClaimed:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Name already claimed",
        ) from None
    return ClaimResponse(message="Name claimed", domain_id=domain_id)


@router.post(
    "/domains/{domain_id}/transfer",
    response_model=TransferResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing caller identity"},
        403: {"model": ErrorResponse, "description": "Caller is not the holder"},
        409: {"model": ErrorResponse, "description": "New holder is the current holder"},
        422: {"description": "Validation error"},
    },
    summary="Transfer ownership of a domain",
    description="Hand a domain record over to a new holder. "
    "Transfers of unknown domain IDs succeed without effect.",
)
async def transfer_ownership(
    request_data: TransferRequest,
    domain_id: DomainId,
    caller: CallerContext = Depends(get_caller_context),
    service: RegistryService = Depends(get_registry_service),
) -> TransferResponse:
    """
    Transfer ownership.

    - **new_holder**: Identity that will hold the domain
    """
    try:
        service.transfer_ownership(domain_id, request_data.new_holder, caller)
    except NotAOwner:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Caller is not the holder",
        ) from None
    except SameOwner:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="New holder is the current holder",
        ) from None
    return TransferResponse(
        message="Owner changed",
        domain_id=domain_id,
        new_holder=request_data.new_holder,
    )


@router.get(
    "/domains/mine",
    response_model=list[DomainRecordResponse],
    responses={401: {"model": ErrorResponse, "description": "Missing caller identity"}},
    summary="List the caller's domains",
)
async def list_owned_domains(
    caller: CallerContext = Depends(get_caller_context),
    service: RegistryService = Depends(get_registry_service),
) -> list[DomainRecordResponse]:
    """List records held by the caller, in ascending domain ID order."""
    return [
        DomainRecordResponse(
            domain_id=domain_id,
            name=record.name,
            offer_state=record.offer_state,
            offer_price=record.offer_price,
            holder=record.holder,
        )
        for domain_id, record in service.owned_domains(caller)
    ]


@router.get(
    "/domains/{domain_id}/claimed",
    response_model=ClaimedResponse,
    summary="Read the claim flag of a domain ID",
)
async def is_claimed(
    domain_id: DomainId,
    service: RegistryService = Depends(get_registry_service),
) -> ClaimedResponse:
    return ClaimedResponse(domain_id=domain_id, claimed=service.is_claimed(domain_id))


@router.get(
    "/holders/{identity}/count",
    response_model=HoldingCountResponse,
    summary="Read the holding count of an identity",
)
async def get_holding_count(
    identity: str,
    service: RegistryService = Depends(get_registry_service),
) -> HoldingCountResponse:
    return HoldingCountResponse(identity=identity, count=service.get_holding_count(identity))


@router.get(
    "/registry",
    response_model=RegistryInfoResponse,
    summary="Read registry-wide information",
)
async def get_registry_info(
    service: RegistryService = Depends(get_registry_service),
) -> RegistryInfoResponse:
    return RegistryInfoResponse(
        administrative_owner=service.get_administrative_owner(),
        total_claimed=service.get_total_claimed(),
    )
