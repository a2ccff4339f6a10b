"""
Navigation API Routes.

HTTP entry point for navigation events from a browser bridge.

Key behaviors:
- POST /api/navigation runs the full pass, including the navigate effect
- POST /api/navigation/preview returns the decision and never navigates
- POST /api/navigation/events queues the event for the background listener
- Errors are reported in the body; the endpoint itself answers 200
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from redirector.api.deps import (
    get_config_store,
    get_event_source,
    get_navigator,
    get_registry,
)
from redirector.api.schemas import (
    DecisionResponse,
    NavigationEventRequest,
    NavigationResponse,
)
from redirector.app_shell.background import NavigationEventSource
from redirector.components.navigation import (
    ConfigStorePort,
    DecideInput,
    DecisionReason,
    NavigatorPort,
    RedirectDecision,
    run,
    run_decide,
)
from redirector.components.services import ServiceRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=NavigationResponse)
async def handle_navigation(
    request: NavigationEventRequest,
    config_store: ConfigStorePort = Depends(get_config_store),
    navigator: NavigatorPort = Depends(get_navigator),
    registry: ServiceRegistry = Depends(get_registry),
) -> NavigationResponse:
    """Evaluate a navigation event and apply the redirect if there is one."""
    output = await run(
        request.to_event(),
        config_store=config_store,
        navigator=navigator,
        registry=registry,
    )
    return NavigationResponse.from_output(output)


@router.post("/preview", response_model=DecisionResponse)
async def preview_navigation(
    request: NavigationEventRequest,
    config_store: ConfigStorePort = Depends(get_config_store),
    registry: ServiceRegistry = Depends(get_registry),
) -> DecisionResponse:
    """Evaluate a navigation event without touching the tab."""
    try:
        snapshot = await config_store.get_snapshot()
    except Exception as e:
        logger.error("Error reading configuration for preview: %s", e)
        return DecisionResponse.from_decision(
            RedirectDecision.none(DecisionReason.CONFIG_UNAVAILABLE)
        )

    decision = run_decide(
        DecideInput(event=request.to_event(), snapshot=snapshot, registry=registry)
    )
    return DecisionResponse.from_decision(decision)


@router.post("/events", status_code=202)
async def dispatch_navigation(
    request: NavigationEventRequest,
    events: NavigationEventSource = Depends(get_event_source),
) -> dict[str, Any]:
    """Hand the event to the background listener and return immediately."""
    tasks = events.dispatch(request.to_event())
    return {"accepted": True, "listeners": len(tasks)}
