import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rulezero.api import (
    analyze_router,
    bans_router,
    brackets_router,
    cards_router,
    categories_router,
    health_router,
    rules_router,
)
from rulezero.config import settings
from rulezero.db.database import init_db
from rulezero.models.failure import KnownError, create_known_failure, create_unknown_failure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("rulezero"),
    lifespan=lifespan,
)

app.include_router(analyze_router)
app.include_router(bans_router)
app.include_router(brackets_router)
app.include_router(cards_router)
app.include_router(categories_router)
app.include_router(health_router)
app.include_router(rules_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a known failure with its own status code."""
    response = create_known_failure(exc)
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an unexpected exception without leaking its message."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
