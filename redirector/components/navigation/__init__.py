"""
Navigation component - redirect decision engine for browser navigations.
"""

from ._impl import (
    decide,
    extract_hostname,
    is_eligible,
    is_loop,
    normalize_instance,
    synthesize_url,
    url_scheme,
)
from .component import run, run_decide
from .models import (
    ConfigSnapshot,
    DecideInput,
    DecisionReason,
    NavigationError,
    NavigationEvent,
    NavigationOutput,
    RedirectAction,
    RedirectDecision,
    RedirectRuleConfig,
)
from .ports import ConfigStorePort, NavigatorPort

__all__ = [
    # Entry points
    "run",
    "run_decide",
    # Input models
    "ConfigSnapshot",
    "DecideInput",
    "NavigationEvent",
    "RedirectRuleConfig",
    # Output models
    "DecisionReason",
    "NavigationError",
    "NavigationOutput",
    "RedirectAction",
    "RedirectDecision",
    # Ports
    "ConfigStorePort",
    "NavigatorPort",
    # _impl re-exports
    "decide",
    "extract_hostname",
    "is_eligible",
    "is_loop",
    "normalize_instance",
    "synthesize_url",
    "url_scheme",
]
