"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
the registry service and the caller context into routes.
"""

from fastapi import Header, HTTPException, Request, status

from src.domain.records import CallerContext
from src.domain.service import RegistryService

CALLER_HEADER = "X-Caller-Identity"


def get_registry_service(request: Request) -> RegistryService:
    """
    Get the registry service from app state.

    The service is created during app lifespan startup and stored in app.state.
    There is exactly one registry per deployment.
    """
    return request.app.state.registry_service


def get_caller_context(
    caller_identity: str | None = Header(default=None, alias=CALLER_HEADER),
) -> CallerContext:
    """
    Build the caller context from the identity header.

    The identity is authenticated upstream; this only checks it is present.

    Returns:
        CallerContext for the invoking identity

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if caller_identity is None or not caller_identity.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity",
        )
    return CallerContext(identity=caller_identity.strip())
