"""
Services component - hostname classification for known services.

Invariants:
- I1: Evaluation order is the registry's declared order
- I2: At most one service is returned per hostname
"""

from __future__ import annotations

from ._impl import DEFAULT_REGISTRY, ServiceRegistry
from .models import MatchServiceInput, MatchServiceOutput


def run_match(
    inp: MatchServiceInput,
    *,
    registry: ServiceRegistry | None = None,
) -> MatchServiceOutput:
    """
    Classify a hostname against the registry.

    Args:
        inp: Input containing the hostname.
        registry: Registry to consult; defaults to the known services.

    Returns:
        MatchServiceOutput with the matching identifier, or None.
    """
    active = registry if registry is not None else DEFAULT_REGISTRY
    return MatchServiceOutput(service_id=active.match(inp.hostname))


def run(
    inp: MatchServiceInput,
    *,
    registry: ServiceRegistry | None = None,
) -> MatchServiceOutput:
    """Main entry point for the services component."""
    if isinstance(inp, MatchServiceInput):
        return run_match(inp, registry=registry)
    raise ValueError(f"Unknown input type: {type(inp)}")
