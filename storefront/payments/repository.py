"""
Accès aux données pour la feature 'payments' (table orders).
"""
import logging
from typing import Any, Dict, Optional

from postgrest.exceptions import APIError

from storefront.errors import PersistenceError
from storefront.infra.supabase_client import ORDERS_TABLE, SupabaseStore

logger = logging.getLogger(__name__)

# Violation de contrainte unique Postgres
UNIQUE_VIOLATION = "23505"


def _error_code(e: APIError) -> Optional[str]:
    code = getattr(e, "code", None)
    if not code and e.args and isinstance(e.args[0], dict):
        code = e.args[0].get("code")
    return str(code) if code else None


# module storefront.payments.repository
def insert_order(store: SupabaseStore, order: Dict[str, Any]) -> bool:
    """
    Insère une commande; orders.session_id porte une contrainte UNIQUE.
    - Retourne True si la ligne est créée, False si la session est déjà enregistrée (23505).
    - PersistenceError pour toute autre erreur (base indisponible, écriture refusée).
    """
    try:
        store.table(ORDERS_TABLE).insert(order).execute()
        return True
    except APIError as e:
        if _error_code(e) == UNIQUE_VIOLATION:
            logger.info("payments.repository.insert_order duplicate session_id=%s", order.get("session_id"))
            return False
        logger.exception("payments.repository.insert_order failed session_id=%s", order.get("session_id"))
        raise PersistenceError("Enregistrement de la commande impossible") from e
    except PersistenceError:
        raise
    except Exception as e:
        logger.exception("payments.repository.insert_order failed session_id=%s", order.get("session_id"))
        raise PersistenceError("Enregistrement de la commande impossible") from e
