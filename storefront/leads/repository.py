"""
Accès aux données 'leads' (table call_requests, ajout seul).
"""
import logging
from typing import Any, Dict

from storefront.errors import PersistenceError
from storefront.infra.supabase_client import CALL_REQUESTS_TABLE, SupabaseStore

logger = logging.getLogger(__name__)


def insert_call_request(store: SupabaseStore, row: Dict[str, Any]) -> None:
    """
    Insère une demande d'appel.
    - PersistenceError si l'écriture échoue.
    """
    try:
        store.table(CALL_REQUESTS_TABLE).insert(row).execute()
    except PersistenceError:
        raise
    except Exception as e:
        logger.exception("leads.repository.insert_call_request failed email=%s", row.get("email"))
        raise PersistenceError("Erreur base de données") from e
