"""
Navigation component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from redirector.components.services import ServiceRegistry

# --- Configuration Snapshot ---


@dataclass(frozen=True)
class RedirectRuleConfig:
    """Per-service redirect setting."""

    is_enabled: bool = False
    chosen_instance: str = ""


@dataclass(frozen=True)
class ConfigSnapshot:
    """
    Read-only view of the user configuration.

    redirect_rules is keyed by lower-cased service identifier.
    None means no redirect configuration exists at all.
    """

    onboarding_complete: bool = False
    redirect_rules: Mapping[str, RedirectRuleConfig] | None = None

    def rule_for(self, identifier: str) -> RedirectRuleConfig | None:
        if self.redirect_rules is None:
            return None
        return self.redirect_rules.get(identifier.lower())


# --- Navigation Event ---


@dataclass(frozen=True)
class NavigationEvent:
    """A navigation about to happen in a browser tab. frame_id 0 is the main frame."""

    url: str
    frame_id: int
    tab_id: int

    @property
    def is_top_level(self) -> bool:
        return self.frame_id == 0


# --- Decision ---


class RedirectAction(str, Enum):
    NONE = "none"
    REDIRECT = "redirect"


class DecisionReason(str, Enum):
    """Why a decision was reached."""

    INELIGIBLE = "ineligible"
    CONFIG_MISSING = "config_missing"
    ONBOARDING_INCOMPLETE = "onboarding_incomplete"
    CONFIG_UNAVAILABLE = "config_unavailable"
    INVALID_URL = "invalid_url"
    NO_MATCH = "no_match"
    LOOP_DETECTED = "loop_detected"
    MATCHED = "matched"


@dataclass(frozen=True)
class RedirectDecision:
    """Outcome of evaluating one navigation event."""

    action: RedirectAction
    reason: DecisionReason
    target_url: str | None = None
    service_id: str | None = None

    @classmethod
    def none(cls, reason: DecisionReason, service_id: str | None = None) -> RedirectDecision:
        return cls(action=RedirectAction.NONE, reason=reason, service_id=service_id)

    @classmethod
    def redirect(cls, target_url: str, service_id: str) -> RedirectDecision:
        return cls(
            action=RedirectAction.REDIRECT,
            reason=DecisionReason.MATCHED,
            target_url=target_url,
            service_id=service_id,
        )

    @property
    def is_redirect(self) -> bool:
        return self.action is RedirectAction.REDIRECT


# --- Errors ---


@dataclass(frozen=True)
class NavigationError:
    """Error recorded while handling a navigation event."""

    code: str
    message: str
    service_id: str | None = None


# --- Input / Output Models ---


@dataclass(frozen=True)
class DecideInput:
    """Input for evaluating an event against a snapshot already in hand."""

    event: NavigationEvent
    snapshot: ConfigSnapshot | None
    registry: ServiceRegistry | None = None


@dataclass(frozen=True)
class NavigationOutput:
    """Output of a full navigation pass."""

    decision: RedirectDecision
    applied: bool = False
    errors: list[NavigationError] = field(default_factory=list)
    success: bool = True
