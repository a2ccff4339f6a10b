"""
Configuration Store Adapters (ConfigStorePort implementations).

- InMemoryConfigStore: holds a snapshot in memory; used by tests and the API
- YamlConfigStore: re-reads a YAML file on every request so edits apply
  to the next navigation

Key behaviors:
- A missing file reads as "no configuration" (None), not an error
- A malformed file raises ValueError for the caller to report
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from redirector.components.navigation import ConfigSnapshot
from redirector.components.services import DEFAULT_REGISTRY, ServiceRegistry
from redirector.rules.loader import load_user_configuration
from redirector.rules.models import UserConfiguration

logger = logging.getLogger(__name__)


class InMemoryConfigStore:
    """Config store backed by a snapshot held in memory."""

    def __init__(self, snapshot: ConfigSnapshot | None = None) -> None:
        self._snapshot = snapshot
        self.reads = 0

    async def get_snapshot(self) -> ConfigSnapshot | None:
        self.reads += 1
        return self._snapshot

    def set_snapshot(self, snapshot: ConfigSnapshot | None) -> None:
        """Replace the stored configuration."""
        self._snapshot = snapshot


class YamlConfigStore:
    """Config store backed by a YAML file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> UserConfiguration | None:
        """Read the file synchronously. None if it does not exist."""
        try:
            return load_user_configuration(self._path)
        except FileNotFoundError:
            logger.info("No configuration file at %s", self._path)
            return None

    def load_registry(self) -> ServiceRegistry:
        """Known services plus any extra services declared in the file."""
        config = self.load()
        if config is None:
            return DEFAULT_REGISTRY
        return config.build_registry()

    async def get_snapshot(self) -> ConfigSnapshot | None:
        config = await asyncio.to_thread(self.load)
        if config is None:
            return None
        return config.to_snapshot()
