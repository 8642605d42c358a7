"""
Rule configuration endpoints.

Backup, restore and reset of the whole rule document, plus a refresh of
the default ban list and built-in categories from Commander Spellbook.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.db import load_rule_model, save_rule_model
from rulezero.db.database import get_session
from rulezero.jobs.fetch_defaults import apply_default_rule_data, fetch_default_rule_data
from rulezero.models.rules import RuleModel
from rulezero.services.default_rules import default_rule_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["rules"])


class SyncResponse(BaseModel):
    """Response model for the default data sync."""

    global_bans: int
    categories: dict[str, int]


@router.get("/export")
async def export_rules(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, Any]:
    """Export the full rule document."""
    model = await load_rule_model(session)
    return model.to_document()


@router.put("/import")
async def import_rules(
    document: Annotated[dict[str, Any], Body(...)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, Any]:
    """
    Replace the rule configuration with an exported document.

    The document must include tiers, globalBans and categories. Nothing is
    stored if it is invalid.
    """
    model = RuleModel.from_document(document)
    await save_rule_model(session, model)
    logger.info("Imported rule document with %d brackets", len(model.tiers))
    return model.to_document()


@router.post("/reset")
async def reset_rules(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, Any]:
    """Restore the built-in default configuration."""
    model = default_rule_model()
    await save_rule_model(session, model)
    logger.info("Reset rule document to defaults")
    return model.to_document()


@router.post("/sync-defaults", response_model=SyncResponse)
async def sync_defaults(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SyncResponse:
    """
    Refresh the global ban list and built-in categories from Commander Spellbook.

    Brackets and custom categories are kept. Returns 502 if Commander
    Spellbook cannot be queried.
    """
    data = await fetch_default_rule_data()
    model = apply_default_rule_data(await load_rule_model(session), data)
    await save_rule_model(session, model)

    return SyncResponse(
        global_bans=len(data.global_bans),
        categories={category: len(names) for category, names in data.categories.items()},
    )
