"""
Accès Supabase partagé par le process.
- SupabaseStore est construit une fois par la factory (app.state.store) puis injecté dans les vues via get_store.
- La connexion est établie paresseusement au premier usage, une seule fois (verrou), puis réutilisée.
- La reconnexion après perte réseau reste à la charge du client Supabase/PostgREST.
"""
import logging
import threading
from typing import Callable, Optional

from fastapi import Request
from supabase import Client, create_client

from storefront.errors import PersistenceError

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"
CALL_REQUESTS_TABLE = "call_requests"


class SupabaseStore:
    def __init__(self, url: str, key: str, client_factory: Callable[[str, str], Client] = create_client):
        self.url = url
        self.key = key
        self._client_factory = client_factory
        self._client: Optional[Client] = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._client is not None

    def client(self) -> Client:
        """
        Retourne le client Supabase, créé au premier appel.
        - PersistenceError si URL/clé manquantes ou si la création échoue.
        """
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                if not self.url or not self.key:
                    raise PersistenceError("SUPABASE_URL/SUPABASE_SERVICE_KEY manquants")
                try:
                    self._client = self._client_factory(self.url, self.key)
                except Exception as e:
                    logger.exception("Connexion Supabase impossible url=%s", self.url)
                    raise PersistenceError(f"Connexion Supabase impossible: {e}") from e
                logger.info("Supabase connecté url=%s", self.url)
        return self._client

    def table(self, name: str):
        return self.client().table(name)


def get_store(request: Request) -> SupabaseStore:
    """Dépendance FastAPI: le store construit par la factory."""
    return request.app.state.store
