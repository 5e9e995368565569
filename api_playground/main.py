"""
API Playground - FastAPI Application Entry Point

A server-side proxy for composing and sending HTTP requests from the
browser, with per-user request history, response comparison and
request analysis.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .exceptions import register_exception_handlers
from .routers import compare, history, proxy
from .services.history_store import HistoryStore, create_history_store


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once; later calls keep existing handlers."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def create_app(
    settings: Settings | None = None,
    store: HistoryStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings; read from the environment if omitted
        store: History store to use; built from settings at startup if omitted
        transport: Optional httpx transport for outbound calls

    Returns:
        The configured FastAPI application
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown events."""
        configure_logging(settings)
        owns_store = app.state.history_store is None
        if owns_store:
            app.state.history_store = create_history_store(settings)
        logger.info("API Playground started")
        yield
        if owns_store:
            app.state.history_store.close()
            app.state.history_store = None

    app = FastAPI(
        title="API Playground",
        description="Send HTTP requests through a server-side proxy and inspect the results",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.history_store = store
    app.state.transport = transport

    # Credentials cannot be combined with a wildcard origin
    allow_credentials = "*" not in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint returning API information."""
        return {
            "name": "API Playground",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(proxy.router)
    app.include_router(history.router)
    app.include_router(compare.router)

    return app


app = create_app()
