"""
Record Catalog API - FastAPI Main Application
Ordered in-memory record catalog over HTTP
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from api.config import Config
from api.models.record_schemas import MessageResponse
from api.responses import IndentedJSONResponse
from api.routers import records
from api.security_config import EXPOSE_HEADERS, get_allowed_hosts, get_allowed_origins
from record_catalog_core.catalog import (
    CatalogError,
    CatalogInvariantError,
    CatalogOperations,
    CatalogStore,
    MalformedPayload,
)

logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "Record Catalog API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Ordered in-memory record catalog with concurrent read/write access"


def configure_logging(level: str) -> None:
    """Install the root handler once; every app still applies its own level"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger().setLevel(level)


def _message(status_code: int, message: str) -> JSONResponse:
    return IndentedJSONResponse(
        status_code=status_code,
        content=jsonable_encoder(MessageResponse(message=message)),
    )


class AppContext:
    """Application context manager"""
    def __init__(self, config: Config, store: CatalogStore):
        self.config = config
        self.store = store
        self.start_time = time.time()
        self.ready = False

    async def startup(self):
        """Mark the application ready once the catalog is consistent"""
        logger.info(f"Starting {APP_NAME} ({self.config.APP_ENV})...")
        self.store.check_invariants()
        self.ready = True
        logger.info(f"{APP_NAME} started with {len(self.store)} records")

    async def shutdown(self):
        logger.info(f"Shutting down {APP_NAME}...")
        self.ready = False


def create_app(config: Optional[Config] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    """
    Build the application and its catalog.

    The store is owned by the returned app; pass one in to share or
    pre-populate it (tests do this to get isolated catalogs).
    """
    config = config or Config()
    if store is None:
        store = CatalogStore() if config.CATALOG_SEED else CatalogStore(seed=())

    configure_logging(config.APP_LOG_LEVEL)
    app_context = AppContext(config, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        await app_context.startup()
        yield
        await app_context.shutdown()

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description=APP_DESCRIPTION,
        lifespan=lifespan,
        debug=config.APP_DEBUG,
    )
    app.state.config = config
    app.state.context = app_context
    app.state.store = store
    app.state.catalog = CatalogOperations(store)

    # Configure CORS with whitelist
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(config.is_production()),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        expose_headers=EXPOSE_HEADERS
    )

    # Configure trusted hosts with whitelist
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=get_allowed_hosts(config.is_production())
    )

    # Configure rate limiting
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[config.RATE_LIMIT_DEFAULT],
        storage_uri=config.RATE_LIMIT_STORAGE_URI,
        enabled=config.RATE_LIMIT_ENABLED,
    )
    app.add_middleware(SlowAPIMiddleware)

    # Sync so slowapi's middleware can call it directly
    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded"""
        logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
        return _message(status.HTTP_429_TOO_MANY_REQUESTS, "too many requests")

    # Middleware for trace ID injection
    @app.middleware("http")
    async def inject_trace_id(request: Request, call_next):
        """Inject trace ID into all requests and responses"""
        trace_id = request.headers.get("X-Trace-Id", str(uuid.uuid4()))

        logger_adapter = logging.LoggerAdapter(logger, {"trace_id": trace_id})
        request.state.logger = logger_adapter
        request.state.trace_id = trace_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Trace-Id"] = trace_id
        response.headers["X-Process-Time"] = str(process_time)

        logger_adapter.info(
            f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
        )
        return response

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Any body that does not decode into a record is a malformed payload"""
        errors = exc.errors()
        logger.debug(f"Rejected request body: {errors[0]['msg'] if errors else exc}")
        return _message(MalformedPayload.status_code, MalformedPayload.message)

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError):
        """Map catalog failures to their status/message pair"""
        return _message(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    # Health check endpoint
    @app.get("/healthz")
    async def health_check():
        """Liveness check"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.time() - app_context.start_time,
        }

    # Readiness check endpoint
    @app.get("/readyz")
    async def readiness_check(request: Request):
        """
        Readiness check.
        - 503 not_ready before startup has completed
        - 503 degraded if the catalog is unsorted or holds duplicate ids
        - 200 otherwise, with the current record count
        """
        trace_id = getattr(request.state, "trace_id", str(uuid.uuid4()))
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

        if not app_context.ready:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "not_ready",
                    "message": "Application not ready",
                    "traceId": trace_id
                }
            )

        try:
            store.check_invariants()
        except CatalogInvariantError as e:
            logger.error(f"Catalog invariant violated: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "degraded",
                    "catalog": "error",
                    "catalog_error": str(e),
                    "ts": ts,
                    "traceId": trace_id,
                }
            )

        return {
            "status": "ok",
            "catalog": "ok",
            "records": len(store),
            "ts": ts,
            "traceId": trace_id,
        }

    records.register_routes(app)

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "environment": config.APP_ENV,
            "endpoints": [
                "/records - List records",
                "/records/{id} - Fetch one record",
                "/healthz - Liveness",
                "/readyz - Readiness",
                "/docs - API documentation",
            ],
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point"""
    config = app.state.config
    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT, log_level=config.APP_LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
