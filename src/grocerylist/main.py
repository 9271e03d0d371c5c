"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from grocerylist import __version__
from grocerylist.config import get_settings
from grocerylist.logging_config import LoggingContext, configure_logging, get_logger
from grocerylist.routers import grocery_lists_router, ingredients_router

settings = get_settings()

# Configure logging on module load
configure_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Grocery List API")
    yield
    logger.info("Shutting down Grocery List API")


app = FastAPI(
    title="Grocery List API",
    description="Grocery lists derived from meal plans",
    version=__version__,
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
    """Tag every log line of a request with its id and log the outcome."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    start = perf_counter()
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
        duration_ms = (perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} status={response.status_code} "
            f"duration_ms={duration_ms:.2f}"
        )
    response.headers.setdefault("X-Request-ID", request_id)
    return response


app.include_router(grocery_lists_router)
app.include_router(ingredients_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "grocerylist-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Grocery List API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
