"""
Health check endpoints.

Liveness and readiness checks. Readiness also reports whether a rule
configuration has been stored or the built-in defaults are in effect.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.db.database import get_session
from rulezero.db.operations import get_rule_document

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    rules: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Touches nothing."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness check.

    Reads the rule configuration row. `rules` is "stored" when one exists and
    "defaults" otherwise. Returns 503 if the database is unavailable.
    """
    try:
        stored = await get_rule_document(session)
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(
        status="ready",
        database="connected",
        rules="defaults" if stored is None else "stored",
    )
