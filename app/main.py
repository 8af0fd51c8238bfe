# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the MongoDB Gateway API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   mongo-gateway            # console script, binds HOST:PORT from settings
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.config import Settings, get_settings
from app.exceptions import (
    GatewayException,
    gateway_exception_handler,
    unhandled_exception_handler,
)
from app.routers import collections, documents, health
from app.routers.documents import TOTAL_RECORDS_HEADER
from lib.mongo_client import create_mongo_client, ping

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Create the MongoDB client unless one was injected, and ping it
    - Shutdown: Close the client if this process created it
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting MongoDB Gateway in {settings.ENVIRONMENT} mode")

    owns_client = app.state.mongo_client is None
    if owns_client:
        app.state.mongo_client = create_mongo_client(
            settings.MONGO_URI,
            server_selection_timeout_ms=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        )

    try:
        ping(app.state.mongo_client)
        logger.info("MongoDB connected")
    except PyMongoError as e:
        # The driver keeps retrying in the background; requests fail with
        # 500 until the server is reachable.
        logger.warning(f"MongoDB not reachable at startup: {e}")

    yield

    logger.info("Shutting down MongoDB Gateway")
    if owns_client:
        app.state.mongo_client.close()
        app.state.mongo_client = None


def create_app(
    settings: Settings | None = None,
    mongo_client: MongoClient | None = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Settings to use (default: loaded from the environment)
        mongo_client: Client to share across requests. When None, the
            lifespan creates one from settings and closes it on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="MongoDB Gateway",
        description="""
## HTTP facade for MongoDB

Exposes a fixed set of collection and document operations to clients that
should not hold a database connection. Every request needs an
`Authorization: Bearer <token>` header with a token from `ALLOWED_TOKENS`,
and every data request names its target with `collectionName` (or
`collection`) and optionally `dbName`.

```bash
curl -X POST http://localhost:3000/insert \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"collection": "users", "document": {"name": "Alice"}}'
```
""",
        version=health.VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Health", "description": "Liveness and database readiness"},
            {"name": "Collections", "description": "Create and drop collections"},
            {"name": "Documents", "description": "Query and modify documents"},
        ],
    )
    app.state.settings = settings
    app.state.mongo_client = mongo_client

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TOTAL_RECORDS_HEADER],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(GatewayException, gateway_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(collections.router, tags=["Collections"])
    app.include_router(documents.router, tags=["Documents"])

    return app


app = create_app()


def run() -> None:
    """Serve the application on HOST:PORT."""
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
