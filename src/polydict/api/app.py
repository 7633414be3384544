"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Store Handle**: One engine per application, kept on `app.state`.
2.  **Middleware Setup**: CORS for browser clients.
3.  **Exception Handling**: Every error is returned as `{"error": message}`.
4.  **Routing**: Health check and the `/words` router.
5.  **Lifecycle**: Disposing the engine on shutdown.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). Tests build their
own app against a temporary database by passing `database_url`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from polydict import __version__
from polydict.api.routers import words
from polydict.api.schemas import HealthOut
from polydict.core.settings import get_logger, load_settings
from polydict.store.session import create_store_engine, session_factory

logger = get_logger("polydict.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: nothing to do; the engine is created by the factory.
    - **Shutdown**: dispose the engine's connection pool.
    """
    logger.info("API starting (store: %s)", app.state.engine.url.render_as_string())
    yield
    app.state.engine.dispose()
    logger.info("API shut down")


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Construct and configure the polydict FastAPI application.

    Parameters
    ----------
    database_url:
        Store to serve; defaults to `DATABASE_URL` from settings.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    settings = load_settings()
    app = FastAPI(
        title="polydict API",
        description="Multilingual dictionary lookups",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    engine = create_store_engine(database_url or settings.database_url)
    app.state.engine = engine
    app.state.session_factory = session_factory(engine)

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Render HTTP errors (including unknown routes) as `{"error": detail}`."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Bad path/query parameters are a 400, not FastAPI's default 422."""
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{where}: {first.get('msg', 'invalid request')}" if where else "Bad Request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map ValueErrors (e.g. unsupported language codes) to HTTP 400."""
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/", response_model=HealthOut, tags=["System"])
    async def health_check() -> HealthOut:
        """Simple liveness probe."""
        return HealthOut(
            status="ok",
            message="Multilingual Dictionary API is running",
            version=__version__,
            environment=settings.environment,
            timestamp=datetime.now(UTC),
        )

    app.include_router(words.router)

    return app


__all__ = ["create_app"]
