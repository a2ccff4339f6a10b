"""
Tests for the navigation entry point (config read, decide, navigate).

Covers the suspension points: configuration fetch and the navigate effect.
"""

from __future__ import annotations

import asyncio

import pytest

from redirector.adapters.config_store import InMemoryConfigStore
from redirector.adapters.dev_navigator import DevNavigator
from redirector.components.navigation import (
    ConfigSnapshot,
    DecisionReason,
    NavigationEvent,
    NavigationOutput,
    RedirectAction,
    run,
)


def nav(url: str, frame_id: int = 0, tab_id: int = 7) -> NavigationEvent:
    return NavigationEvent(url=url, frame_id=frame_id, tab_id=tab_id)


class FailingConfigStore:
    """Config store whose backing storage is unreachable."""

    async def get_snapshot(self) -> ConfigSnapshot | None:
        raise OSError("storage offline")


def handle(event: NavigationEvent, config_store, navigator) -> NavigationOutput:
    return asyncio.run(run(event, config_store=config_store, navigator=navigator))


class TestRedirectApplied:
    def test_navigates_tab_once(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator
    ) -> None:
        output = handle(nav("https://youtube.com/watch?v=abc#t=10", tab_id=42), config_store, navigator)

        assert output.success is True
        assert output.applied is True
        assert output.decision.action is RedirectAction.REDIRECT
        assert navigator.attempts == [(42, "https://instance.example/watch?v=abc#t=10")]
        assert navigator.last_url == "https://instance.example/watch?v=abc#t=10"

    def test_no_match_does_not_navigate(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator
    ) -> None:
        output = handle(nav("https://example.org/"), config_store, navigator)

        assert output.decision.reason is DecisionReason.NO_MATCH
        assert output.applied is False
        assert output.success is True
        assert navigator.attempts == []

    def test_loop_does_not_navigate(self, snapshot_factory, navigator: DevNavigator) -> None:
        store = InMemoryConfigStore(snapshot_factory(youtube="youtube.com"))
        output = handle(nav("https://youtube.com/watch"), store, navigator)

        assert output.decision.reason is DecisionReason.LOOP_DETECTED
        assert navigator.attempts == []


class TestConfigurationRead:
    def test_sub_frame_skips_config_read(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator
    ) -> None:
        output = handle(nav("https://youtube.com/watch", frame_id=2), config_store, navigator)

        assert output.decision.reason is DecisionReason.INELIGIBLE
        assert config_store.reads == 0
        assert navigator.attempts == []

    def test_config_read_every_event(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator
    ) -> None:
        handle(nav("https://youtube.com/a"), config_store, navigator)
        handle(nav("https://youtube.com/b"), config_store, navigator)
        assert config_store.reads == 2

    def test_new_instance_applies_to_next_navigation(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator, snapshot_factory
    ) -> None:
        handle(nav("https://youtube.com/watch?v=1"), config_store, navigator)
        config_store.set_snapshot(snapshot_factory(youtube="https://other.example"))
        handle(nav("https://youtube.com/watch?v=2"), config_store, navigator)

        assert [a.url for a in navigator.applied] == [
            "https://instance.example/watch?v=1",
            "https://other.example/watch?v=2",
        ]

    def test_missing_configuration(self, navigator: DevNavigator) -> None:
        output = handle(nav("https://youtube.com/"), InMemoryConfigStore(None), navigator)

        assert output.decision.reason is DecisionReason.CONFIG_MISSING
        assert output.success is True
        assert navigator.attempts == []

    def test_store_failure_is_reported(self, navigator: DevNavigator) -> None:
        output = handle(nav("https://youtube.com/"), FailingConfigStore(), navigator)

        assert output.decision.action is RedirectAction.NONE
        assert output.decision.reason is DecisionReason.CONFIG_UNAVAILABLE
        assert output.success is False
        assert output.errors[0].code == "config_unavailable"
        assert "storage offline" in output.errors[0].message
        assert navigator.attempts == []


class TestNavigateFailure:
    def test_exception_is_terminal(self, config_store: InMemoryConfigStore) -> None:
        navigator = DevNavigator(fail_with=RuntimeError("tab closed"))
        output = handle(nav("https://youtube.com/watch"), config_store, navigator)

        assert output.applied is False
        assert output.success is False
        assert output.decision.is_redirect is True
        assert len(output.errors) == 1
        assert output.errors[0].code == "navigate_failed"
        assert output.errors[0].service_id == "YouTube"
        assert len(navigator.attempts) == 1

    def test_refusal_is_terminal(self, config_store: InMemoryConfigStore) -> None:
        navigator = DevNavigator(refuse=True)
        output = handle(nav("https://youtube.com/watch"), config_store, navigator)

        assert output.applied is False
        assert output.errors[0].code == "navigate_failed"
        assert len(navigator.attempts) == 1
        assert navigator.applied == []

    def test_failure_is_logged(
        self, config_store: InMemoryConfigStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        navigator = DevNavigator(fail_with=RuntimeError("tab closed"))
        with caplog.at_level("ERROR"):
            handle(nav("https://youtube.com/watch"), config_store, navigator)
        assert "tab closed" in caplog.text


class TestConcurrentEvents:
    def test_overlapping_events_are_independent(
        self, config_store: InMemoryConfigStore, navigator: DevNavigator
    ) -> None:
        events = [
            nav("https://youtube.com/watch?v=1", tab_id=1),
            nav("https://youtube.com/watch?v=2", tab_id=2),
            nav("https://example.org/", tab_id=3),
            nav("https://youtube.com/embed", frame_id=5, tab_id=4),
        ]

        async def scenario() -> list[NavigationOutput]:
            return await asyncio.gather(
                *(run(e, config_store=config_store, navigator=navigator) for e in events)
            )

        outputs = asyncio.run(scenario())

        assert [o.applied for o in outputs] == [True, True, False, False]
        assert sorted(navigator.attempts) == [
            (1, "https://instance.example/watch?v=1"),
            (2, "https://instance.example/watch?v=2"),
        ]
