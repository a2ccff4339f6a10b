"""
Navigation component - redirect decision engine.

Evaluates each top-level navigation against the user configuration and,
when an enabled service matches, points the tab at the chosen instance.

Invariants:
- I1: At most one redirect per navigation event
- I2: A redirect target never shares the original hostname
- I3: Nothing is redirected before onboarding is complete
- I4: No state is carried between events; config is read fresh every time
"""

from __future__ import annotations

import logging

from redirector.components.services import ServiceRegistry

from ._impl import decide, is_eligible
from .models import (
    ConfigSnapshot,
    DecideInput,
    DecisionReason,
    NavigationError,
    NavigationEvent,
    NavigationOutput,
    RedirectDecision,
)
from .ports import ConfigStorePort, NavigatorPort

logger = logging.getLogger(__name__)


def _describe_snapshot(snapshot: ConfigSnapshot | None) -> str:
    if snapshot is None:
        return "<none>"
    rules = snapshot.redirect_rules
    if rules is None:
        return f"onboarding_complete={snapshot.onboarding_complete} redirect_rules=<none>"
    enabled = sorted(key for key, rule in rules.items() if rule.is_enabled)
    return (
        f"onboarding_complete={snapshot.onboarding_complete} "
        f"rules={len(rules)} enabled={enabled}"
    )


def run_decide(inp: DecideInput) -> RedirectDecision:
    """
    Evaluate an event against a snapshot without applying anything.

    Args:
        inp: Event, snapshot and optional registry.

    Returns:
        RedirectDecision for the event.
    """
    return decide(inp.event, inp.snapshot, inp.registry)


async def run(
    inp: NavigationEvent,
    *,
    config_store: ConfigStorePort,
    navigator: NavigatorPort,
    registry: ServiceRegistry | None = None,
) -> NavigationOutput:
    """
    Handle one navigation event end to end.

    Reads the configuration, decides, and on REDIRECT applies the navigate
    effect exactly once. Failures are logged and reported in the output;
    nothing is retried and nothing is raised.

    Args:
        inp: The navigation event.
        config_store: Source of the configuration snapshot.
        navigator: Effect used to update the tab.
        registry: Services to consider; defaults to the known services.

    Returns:
        NavigationOutput with the decision and whether it was applied.
    """
    logger.debug(
        "Navigation in tab %s frame %s: %s", inp.tab_id, inp.frame_id, inp.url
    )

    snapshot: ConfigSnapshot | None = None
    if is_eligible(inp):
        try:
            snapshot = await config_store.get_snapshot()
        except Exception as e:
            logger.error("Could not read configuration for %s: %s", inp.url, e)
            return NavigationOutput(
                decision=RedirectDecision.none(DecisionReason.CONFIG_UNAVAILABLE),
                errors=[NavigationError(code="config_unavailable", message=str(e))],
                success=False,
            )
        logger.debug("Loaded configuration: %s", _describe_snapshot(snapshot))

    decision = decide(inp, snapshot, registry)
    if not decision.is_redirect:
        return NavigationOutput(decision=decision)

    assert decision.target_url is not None
    try:
        applied = await navigator.apply(inp.tab_id, decision.target_url)
    except Exception as e:
        logger.error("Error updating tab %s to %s: %s", inp.tab_id, decision.target_url, e)
        return NavigationOutput(
            decision=decision,
            applied=False,
            errors=[
                NavigationError(
                    code="navigate_failed",
                    message=str(e),
                    service_id=decision.service_id,
                )
            ],
            success=False,
        )

    if not applied:
        logger.error("Navigator refused to update tab %s to %s", inp.tab_id, decision.target_url)
        return NavigationOutput(
            decision=decision,
            applied=False,
            errors=[
                NavigationError(
                    code="navigate_failed",
                    message=f"Tab {inp.tab_id} was not updated",
                    service_id=decision.service_id,
                )
            ],
            success=False,
        )

    logger.info("Redirected tab %s to %s", inp.tab_id, decision.target_url)
    return NavigationOutput(decision=decision, applied=True)
