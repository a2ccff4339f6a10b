"""
ServiceRegistry - ordered hostname classification for known services.

Key behaviors:
- Descriptors are evaluated in declared order; first match wins
- Identifiers are unique, compared case-insensitively (config keys are lower-cased)
- Registries are immutable; adding a service returns a new registry
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import ServiceDescriptor


class ServiceRegistry:
    """Immutable, ordered table of known services."""

    def __init__(self, descriptors: Iterable[ServiceDescriptor]) -> None:
        self._descriptors = tuple(descriptors)

        seen: set[str] = set()
        for descriptor in self._descriptors:
            if not descriptor.identifier or not descriptor.identifier.strip():
                raise ValueError("Service identifier is required")
            key = descriptor.config_key
            if key in seen:
                raise ValueError(f"Duplicate service identifier: {descriptor.identifier!r}")
            seen.add(key)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def descriptors(self) -> tuple[ServiceDescriptor, ...]:
        return self._descriptors

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(d.identifier for d in self._descriptors)

    def get(self, identifier: str) -> ServiceDescriptor | None:
        """Get a descriptor by its exact identifier."""
        for descriptor in self._descriptors:
            if descriptor.identifier == identifier:
                return descriptor
        return None

    def match(self, hostname: str) -> str | None:
        """Return the identifier of the first service serving this hostname."""
        for descriptor in self._descriptors:
            if descriptor.host_matches(hostname):
                return descriptor.identifier
        return None

    def with_services(self, *descriptors: ServiceDescriptor) -> ServiceRegistry:
        """New registry with the descriptors appended at lowest priority."""
        return ServiceRegistry((*self._descriptors, *descriptors))


# --- Known Services ---

DEFAULT_SERVICES: tuple[ServiceDescriptor, ...] = (
    ServiceDescriptor.for_domains("GitHub", "github.com"),
    ServiceDescriptor.for_domains("ChatGPT", "chatgpt.com", "chat.openai.com"),
    ServiceDescriptor.for_domains("X (Twitter)", "twitter.com", "x.com"),
    ServiceDescriptor.for_domains("Reddit", "reddit.com", "redd.it"),
    ServiceDescriptor.for_domains("Twitch", "twitch.tv"),
    ServiceDescriptor.for_domains("YouTube", "youtube.com", "youtu.be"),
    ServiceDescriptor.for_domains("Medium", "medium.com"),
    ServiceDescriptor.for_domains("Bluesky", "bsky.app"),
    ServiceDescriptor.for_domains("Pixiv", "pixiv.net"),
    ServiceDescriptor.for_domains("Soundcloud", "soundcloud.com"),
    ServiceDescriptor.for_domains("Genius", "genius.com"),
)

DEFAULT_REGISTRY = ServiceRegistry(DEFAULT_SERVICES)
