from rulezero.db.database import get_session, init_db
from rulezero.db.operations import (
    delete_rule_document,
    get_rule_document,
    load_rule_model,
    rule_document_to_model,
    save_rule_model,
)

__all__ = [
    "delete_rule_document",
    "get_rule_document",
    "get_session",
    "init_db",
    "load_rule_model",
    "rule_document_to_model",
    "save_rule_model",
]
