"""
Services component input/output models.

A service is a canonical identifier plus a hostname predicate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

HostPredicate = Callable[[str], bool]


def canonical_host(hostname: str) -> str:
    """Lower-case a hostname and drop a trailing root dot."""
    host = hostname.strip().lower()
    if host.endswith("."):
        host = host[:-1]
    return host


def suffix_matcher(*domains: str) -> HostPredicate:
    """
    Build a predicate matching a domain and any of its subdomains.

    "youtube.com" matches "youtube.com" and "m.youtube.com" but not
    "notyoutube.com".
    """
    roots = tuple(canonical_host(d) for d in domains if d and d.strip())
    if not roots:
        raise ValueError("At least one domain is required")

    def host_matches(hostname: str) -> bool:
        host = canonical_host(hostname)
        if not host:
            return False
        return any(host == root or host.endswith("." + root) for root in roots)

    return host_matches


@dataclass(frozen=True)
class ServiceDescriptor:
    """Known service and the hostnames it is served from."""

    identifier: str
    host_matches: HostPredicate = field(compare=False, repr=False)
    domains: tuple[str, ...] = ()

    @classmethod
    def for_domains(cls, identifier: str, *domains: str) -> ServiceDescriptor:
        """Descriptor whose predicate is a suffix match on the given domains."""
        return cls(
            identifier=identifier,
            host_matches=suffix_matcher(*domains),
            domains=tuple(domains),
        )

    @property
    def config_key(self) -> str:
        """Key used for this service in the user configuration."""
        return self.identifier.lower()


# --- Input / Output Models ---


@dataclass(frozen=True)
class MatchServiceInput:
    """Input for classifying a hostname."""

    hostname: str


@dataclass(frozen=True)
class MatchServiceOutput:
    """Output of hostname classification."""

    service_id: str | None

    @property
    def matched(self) -> bool:
        return self.service_id is not None
