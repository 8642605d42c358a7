"""
Database CRUD operations for the stored rule configuration.

The configuration is persisted as a JSON document. Loading turns it back
into an immutable RuleModel; saving stores a snapshot.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.config import settings
from rulezero.models.db import RuleDocumentDB
from rulezero.models.rules import RuleModel
from rulezero.services.default_rules import default_rule_model

logger = logging.getLogger(__name__)


async def get_rule_document(
    session: AsyncSession,
    name: str = settings.rule_document_name,
) -> RuleDocumentDB | None:
    """
    Get a stored rule document by name.

    Returns None if nothing has been stored under this name.
    """
    result = await session.execute(select(RuleDocumentDB).where(RuleDocumentDB.name == name))
    return result.scalar_one_or_none()


def rule_document_to_model(db_document: RuleDocumentDB) -> RuleModel:
    """
    Convert a stored rule document to a RuleModel.

    Raises:
        InvalidInputError: If the stored document is malformed
    """
    return RuleModel.from_document(db_document.document)


async def load_rule_model(
    session: AsyncSession,
    name: str = settings.rule_document_name,
) -> RuleModel:
    """
    Load the active rule configuration.

    Falls back to the built-in defaults when nothing is stored yet.
    """
    db_document = await get_rule_document(session, name)
    if db_document is None:
        logger.info("No stored rule document %r, using defaults", name)
        return default_rule_model()
    return rule_document_to_model(db_document)


async def save_rule_model(
    session: AsyncSession,
    model: RuleModel,
    name: str = settings.rule_document_name,
) -> RuleDocumentDB:
    """
    Store a rule configuration snapshot, replacing any previous one.

    Returns the stored row.
    """
    document = model.to_document()
    existing = await get_rule_document(session, name)

    if existing:
        existing.document = document
        await session.flush()
        logger.info("Updated rule document %r", name)
        return existing

    db_document = RuleDocumentDB(name=name, document=document)
    session.add(db_document)
    await session.flush()
    logger.info("Created rule document %r", name)
    return db_document


async def delete_rule_document(
    session: AsyncSession,
    name: str = settings.rule_document_name,
) -> bool:
    """
    Delete a stored rule document.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(delete(RuleDocumentDB).where(RuleDocumentDB.name == name))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
