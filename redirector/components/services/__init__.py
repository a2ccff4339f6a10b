"""
Services component - registry of known services and hostname matching.
"""

from ._impl import DEFAULT_REGISTRY, DEFAULT_SERVICES, ServiceRegistry
from .component import run, run_match
from .models import (
    HostPredicate,
    MatchServiceInput,
    MatchServiceOutput,
    ServiceDescriptor,
    canonical_host,
    suffix_matcher,
)

__all__ = [
    # Entry points
    "run",
    "run_match",
    # Models
    "HostPredicate",
    "MatchServiceInput",
    "MatchServiceOutput",
    "ServiceDescriptor",
    "canonical_host",
    "suffix_matcher",
    # Registry
    "DEFAULT_REGISTRY",
    "DEFAULT_SERVICES",
    "ServiceRegistry",
]
