import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.deps import engine
from app.api.routers.bookings import router as bookings_router
from app.api.routers.health import router as health_router
from app.api.routers.loyalty import router as loyalty_router
from app.api.routers.rates import router as rates_router
from app.api.routers.worker import router as worker_router
from app.config import get_settings
from app.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.infrastructure.db.tables import metadata

settings = get_settings()

# Configure structured logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, 422),
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (ConflictError, 409),
    (InvalidStateError, 409),
    (InternalError, 500),
]


def status_for(exc: DomainError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables (dev/demo; production schema is managed outside the service)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="Rental Core API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = status_for(exc)
    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, InternalError):
        # the cause was already logged by the use case boundary
        content["error_id"] = str(uuid.uuid4())
        logger.error(
            "Internal error returned to client",
            extra={"error_id": content["error_id"], "operation": exc.operation, "path": request.url.path},
        )
    elif isinstance(exc, ValidationError):
        content["field"] = exc.field
    return JSONResponse(status_code=status_code, content=content)


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Logs unhandled exceptions internally and returns a generic error, so no
    stack trace reaches the client.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "code": "INTERNAL_ERROR",
            "error_id": error_id,
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(rates_router, prefix="/api/v1", tags=["Rates"])
app.include_router(loyalty_router, prefix="/api/v1", tags=["Loyalty"])
app.include_router(worker_router, prefix="/api/v1", tags=["Worker"])
