"""
Services API Routes.

Lists the known services in the order they are evaluated.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from redirector.api.deps import get_registry
from redirector.api.schemas import ServiceResponse
from redirector.components.services import ServiceRegistry

router = APIRouter()


@router.get("", response_model=list[ServiceResponse])
def list_services(
    registry: ServiceRegistry = Depends(get_registry),
) -> list[ServiceResponse]:
    """Known services in priority order."""
    return [
        ServiceResponse(
            identifier=descriptor.identifier,
            config_key=descriptor.config_key,
            domains=list(descriptor.domains),
            priority=index,
        )
        for index, descriptor in enumerate(registry)
    ]
