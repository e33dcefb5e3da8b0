"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from moneydesk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from moneydesk.api.v1 import budgets, emi_reminders, fixed_deposits, savings_goals
from moneydesk.config import Settings, get_settings
from moneydesk.domain.exceptions import InvalidInputError, PersistenceError, RecordNotFoundError
from moneydesk.infrastructure.database.session import build_engine, build_session_factory
from moneydesk.infrastructure.memory import build_memory_store
from moneydesk.infrastructure.observability.logging import setup_logging
from moneydesk.infrastructure.observability.metrics import record_store_failure

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    """Map domain failures to HTTP responses; prior stored state is untouched"""

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        logger.warning(f"Invalid input: {exc}", extra={"request_id": getattr(request.state, "request_id", None)})
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PersistenceError)
    async def store_unavailable(request: Request, exc: PersistenceError):
        route = request.scope.get("route")
        record_store_failure(request.method, getattr(route, "path", request.url.path))
        logger.error(f"Store error: {exc}", extra={"request_id": getattr(request.state, "request_id", None)})
        return JSONResponse(status_code=503, content={"detail": "Instrument store unavailable"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.service_name)

    app = FastAPI(
        title="moneydesk",
        description="Fixed deposits, EMI reminders, budgets and savings goals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.session_factory = None
    app.state.memory_store = None
    if settings.store_backend == "sql":
        app.state.session_factory = build_session_factory(build_engine(settings.database_url))
    elif settings.store_backend == "memory":
        app.state.memory_store = build_memory_store()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    _register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "store": settings.store_backend}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(fixed_deposits.router, prefix="/v1", tags=["fixed-deposits"])
    app.include_router(emi_reminders.router, prefix="/v1", tags=["emi-reminders"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])
    app.include_router(savings_goals.router, prefix="/v1", tags=["savings-goals"])

    return app
