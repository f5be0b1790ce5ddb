"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealplanner.config import get_settings
from mealplanner.logging_config import LoggingContext, configure_logging, get_logger
from mealplanner.normalize.errors import AggregationError
from mealplanner.routers import grocery_router

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Mealplanner API ({settings.environment})")
    yield
    logger.info("Shutting down Mealplanner API")


app = FastAPI(
    title="Mealplanner API",
    description="Recipe ingredient aggregation and grocery lists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag log records with a request id and echo it in the response."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    with LoggingContext(
        request_id=request_id,
        household_id=request.headers.get("x-household-id"),
    ):
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(AggregationError)
async def aggregation_error_handler(request: Request, exc: AggregationError) -> JSONResponse:
    """Report invalid ingredient data as an unprocessable request."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


app.include_router(grocery_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealplanner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealplanner API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
