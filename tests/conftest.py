from collections.abc import Callable

import pytest

from redirector.adapters.config_store import InMemoryConfigStore
from redirector.adapters.dev_navigator import DevNavigator
from redirector.components.navigation import ConfigSnapshot, RedirectRuleConfig

SnapshotFactory = Callable[..., ConfigSnapshot]


def make_snapshot(
    onboarding_complete: bool = True,
    **instances: str | None,
) -> ConfigSnapshot:
    """
    Snapshot with one enabled rule per keyword argument.

    A value of None produces a disabled rule with no instance.
    """
    rules = {
        key.lower(): RedirectRuleConfig(
            is_enabled=instance is not None,
            chosen_instance=instance or "",
        )
        for key, instance in instances.items()
    }
    return ConfigSnapshot(onboarding_complete=onboarding_complete, redirect_rules=rules)


@pytest.fixture
def snapshot_factory() -> SnapshotFactory:
    return make_snapshot


@pytest.fixture
def youtube_snapshot() -> ConfigSnapshot:
    """YouTube enabled and pointed at a bare-host instance."""
    return make_snapshot(youtube="instance.example")


@pytest.fixture
def config_store(youtube_snapshot: ConfigSnapshot) -> InMemoryConfigStore:
    return InMemoryConfigStore(youtube_snapshot)


@pytest.fixture
def navigator() -> DevNavigator:
    return DevNavigator()


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML configuration file and return its path."""

    def write(content: str):
        path = tmp_path / "redirects.yaml"
        path.write_text(content)
        return path

    return write
