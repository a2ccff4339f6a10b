import logging
import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, HTTPException, Request

from redirector.adapters.config_store import YamlConfigStore
from redirector.adapters.dev_navigator import DevNavigator
from redirector.app_shell.background import NavigationEventSource
from redirector.components.navigation import ConfigStorePort, NavigatorPort
from redirector.components.services import DEFAULT_REGISTRY, ServiceRegistry

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.config_path = Path(
            os.environ.get("REDIRECTOR_CONFIG_PATH", str(self.base_dir / "redirects.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Ports ---
@lru_cache
def get_yaml_store() -> YamlConfigStore:
    return YamlConfigStore(get_settings().config_path)


def get_config_store(store: YamlConfigStore = Depends(get_yaml_store)) -> ConfigStorePort:
    return store


@lru_cache
def get_navigator() -> NavigatorPort:
    return DevNavigator()


def get_registry(store: YamlConfigStore = Depends(get_yaml_store)) -> ServiceRegistry:
    try:
        return store.load_registry()
    except (ValueError, OSError) as e:
        logger.error("Extra services unavailable, using known services only: %s", e)
        return DEFAULT_REGISTRY


def get_event_source(request: Request) -> NavigationEventSource:
    events: NavigationEventSource | None = getattr(request.app.state, "events", None)
    if events is None:
        raise HTTPException(status_code=503, detail="Navigation listener not running")
    return events
