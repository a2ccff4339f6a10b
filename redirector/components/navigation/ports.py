"""
Navigation component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from .models import ConfigSnapshot


class ConfigStorePort(Protocol):
    """Read access to the user configuration."""

    async def get_snapshot(self) -> ConfigSnapshot | None:
        """Get the current configuration, or None if none is stored."""
        ...


class NavigatorPort(Protocol):
    """Effect that points a tab at a new URL."""

    async def apply(self, tab_id: int, url: str) -> bool:
        """Navigate the tab. Returns False (or raises) on failure."""
        ...
