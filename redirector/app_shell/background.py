"""
Background wiring for the redirect engine.

NavigationEventSource stands in for the browser's before-navigate event:
listeners are registered once and every dispatched event runs in its own
asyncio task. Background connects the navigation component to a source.

Key behaviors:
- Listener registration is idempotent
- One task per listener per event; tasks are independent
- Task outcomes are logged; exceptions never reach the event source
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from redirector.components.navigation import (
    ConfigStorePort,
    NavigationEvent,
    NavigationOutput,
    NavigatorPort,
)
from redirector.components.navigation import run as run_navigation
from redirector.components.services import ServiceRegistry

logger = logging.getLogger(__name__)

NavigationListener = Callable[[NavigationEvent], Awaitable[object]]
RegistryProvider = Callable[[], ServiceRegistry]


class NavigationEventSource:
    """In-process source of navigation events."""

    def __init__(self) -> None:
        self._listeners: list[NavigationListener] = []
        self._pending: set[asyncio.Task[object]] = set()

    def add_listener(self, listener: NavigationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def has_listener(self, listener: NavigationListener) -> bool:
        return listener in self._listeners

    def remove_listener(self, listener: NavigationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def dispatch(self, event: NavigationEvent) -> list[asyncio.Task[object]]:
        """
        Deliver an event to every listener.

        Must be called from a running event loop. Returns the spawned tasks.
        """
        tasks = []
        for listener in list(self._listeners):
            task: asyncio.Task[object] = asyncio.ensure_future(listener(event))
            self._pending.add(task)
            task.add_done_callback(self._on_done)
            tasks.append(task)
        return tasks

    def _on_done(self, task: asyncio.Task[object]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Navigation listener failed: %s", exc, exc_info=exc)

    async def drain(self) -> None:
        """Wait for every in-flight task."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class Background:
    """
    Connects the redirect engine to a navigation event source.

    The registry is either fixed or fetched from registry_provider on
    every event.
    """

    def __init__(
        self,
        events: NavigationEventSource,
        config_store: ConfigStorePort,
        navigator: NavigatorPort,
        registry: ServiceRegistry | None = None,
        registry_provider: RegistryProvider | None = None,
    ) -> None:
        self._events = events
        self._config_store = config_store
        self._navigator = navigator
        self._registry = registry
        self._registry_provider = registry_provider

    async def current_registry(self) -> ServiceRegistry | None:
        if self._registry_provider is None:
            return self._registry
        return await asyncio.to_thread(self._registry_provider)

    async def handle_navigation(self, event: NavigationEvent) -> NavigationOutput:
        output = await run_navigation(
            event,
            config_store=self._config_store,
            navigator=self._navigator,
            registry=await self.current_registry(),
        )
        logger.debug(
            "Tab %s navigation handled: %s (%s)",
            event.tab_id,
            output.decision.action.value,
            output.decision.reason.value,
        )
        return output

    async def warm_up(self) -> bool:
        """Touch the config store once at startup. Failures are logged."""
        try:
            snapshot = await self._config_store.get_snapshot()
        except Exception as e:
            logger.error("Error during early configuration access: %s", e)
            return False
        logger.info(
            "Configuration available: %s",
            "no" if snapshot is None else "yes",
        )
        return True

    def main(self) -> None:
        """Register the navigation listener. Safe to call more than once."""
        if self._events.has_listener(self.handle_navigation):
            logger.info("Navigation listener already registered")
            return
        self._events.add_listener(self.handle_navigation)
        logger.info("Navigation listener registered")
