"""
formquota - FastAPI application
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formquota import __version__
from formquota.api.forms import router as forms_router
from formquota.config import Settings, get_settings
from formquota.repositories.store import Store, open_store
from formquota.services.aggregator import Aggregator
from formquota.services.allocator import Allocator

logger = logging.getLogger(__name__)


def attach_store(app: FastAPI, store: Store, settings: Settings) -> None:
    """Wire the store and the services built on it onto app.state"""
    app.state.store = store
    app.state.allocator = Allocator(store.submissions, lock_timeout=settings.lock_timeout_seconds)
    app.state.aggregator = Aggregator(store.forms, store.submissions)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (defaults to environment)
        store: Pre-opened store; when omitted the lifespan opens one from
            settings and closes it on shutdown
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        owned = store is None
        active = await open_store(settings) if owned else store
        attach_store(app, active, settings)
        logger.info(f"formquota ready ({active.backend} backend)")
        yield
        # Shutdown
        if owned:
            await active.close()

    app = FastAPI(
        title="formquota",
        description="Forms with capacity-limited options",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(forms_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/health")
    async def api_health():
        return {"status": "ok", "service": "formquota", "backend": app.state.store.backend}

    return app


app = create_app()
