"""FieldOps Dispatch — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fieldops.adapters.persistence.database import engine
from fieldops.application.use_cases.commit_assignments import DispatchConflictError
from fieldops.config import settings
from fieldops.infrastructure.api.dependencies import memory_pools
from fieldops.infrastructure.api.routes_health import router as health_router
from fieldops.infrastructure.api.routes_tools import router as tools_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.data_backend == "sql":
        try:
            async with engine.begin():
                pass  # Connection pool warmed up
            logger.info("Database connection established")
        except Exception as e:
            logger.warning("Database not available on startup: %s", e)
    else:
        memory_pools()
        logger.info("Using in-memory pools from %s", settings.csv_data_path)
    yield
    await engine.dispose()


def _error_body(code: str, message: str, details: list | None = None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.info("Rejected %s: %d validation errors", request.url.path, len(details))
    return JSONResponse(
        status_code=422,
        content=_error_body("validation_error", "Tool input failed validation", details),
    )


async def _dispatch_conflict_handler(request: Request, exc: DispatchConflictError):
    logger.warning("Dispatch conflict on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=409,
        content=_error_body("dispatch_conflict", str(exc), [{"assignmentIds": exc.assignment_ids}]),
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="FieldOps Dispatch",
        description="Dispatch-planning tools: intake, technician lookup, plan review, commit",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(DispatchConflictError, _dispatch_conflict_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(tools_router, prefix="/api")

    return app


app = create_app()
