"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.engine import make_url

from bankoffers import __version__
from bankoffers.config import get_settings
from bankoffers.database import OfferStore

# Ensure structlog has a sink in container/runtime logs.
logging.basicConfig(level=logging.INFO, format="%(message)s")

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting bank offers service", version=__version__, port=settings.port)

    url = make_url(settings.sqlalchemy_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    store = OfferStore.from_settings(settings)
    await store.create_schema()
    app.state.store = store
    logger.info("Database initialized", store=repr(store))

    yield

    # Shutdown
    await store.dispose()
    logger.info("Database connection pool closed")


# Create FastAPI app
app = FastAPI(
    title="Bank Offers",
    description="Flipkart bank offer ingestion and best-discount lookup",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 instead of FastAPI's 422."""
    logger.info("request_invalid", method=request.method, path=request.url.path)
    return JSONResponse(
        {"detail": "Malformed request.", "errors": jsonable_encoder(exc.errors())},
        status_code=400,
    )


# Import and include routers
from bankoffers.api import offers

app.include_router(offers.router, tags=["offers"])


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness message."""
    return "Bank offers service is running!"


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
