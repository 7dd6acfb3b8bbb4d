"""FastAPI entry point for Registrar."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from registrar import __version__
from registrar.api.registrations import router as registrations_router
from registrar.config import Settings, load_settings
from registrar.engine.registry import Registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Registrar %s started", __version__)
    try:
        yield
    finally:
        registry: Registry = app.state.registry
        if app.state.owns_registry:
            logger.info("Registrar stopping, dropping %d user(s)", len(registry))
            registry.clear()
        else:
            logger.info("Registrar stopping")


def create_app(registry: Registry | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application around a registry.

    A registry passed in stays the caller's: it is left intact on
    shutdown. Without one, the app creates and owns its own.
    """
    settings = settings or load_settings()

    app = FastAPI(title="Registrar", version=__version__, lifespan=lifespan)
    app.state.owns_registry = registry is None
    app.state.registry = registry if registry is not None else Registry()
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(registrations_router)

    @app.get("/api/health")
    async def health(request: Request):
        return {
            "status": "ok",
            "version": __version__,
            "users": len(request.app.state.registry),
        }

    return app


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Return the process-wide app, building it on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str):
    # `uvicorn registrar.app:app` resolves the app lazily through here
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main():
    import uvicorn

    global _app
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _app = create_app(settings=settings)
    uvicorn.run(
        _app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
