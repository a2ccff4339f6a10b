import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

from fastapi import FastAPI

from redirector.adapters.config_store import YamlConfigStore
from redirector.api.deps import get_navigator, get_registry, get_settings, get_yaml_store
from redirector.app_shell.background import Background, NavigationEventSource

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    store: YamlConfigStore = get_yaml_store()

    events = NavigationEventSource()
    background = Background(
        events=events,
        config_store=store,
        navigator=get_navigator(),
        registry_provider=partial(get_registry, store),
    )
    background.main()

    # Touch the configuration early so problems show up in the startup log
    logger.info("Configuration path: %s", settings.config_path)
    await background.warm_up()

    app.state.events = events
    yield
    await events.drain()


app = FastAPI(
    title="Instance Redirector API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from redirector.api.routes import navigation, services  # noqa: E402

app.include_router(navigation.router, prefix="/api/navigation", tags=["Navigation"])
app.include_router(services.router, prefix="/api/services", tags=["Services"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "redirector"}
