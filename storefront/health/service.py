from urllib.parse import urlparse
import socket
from typing import Any, Dict

from storefront.infra.supabase_client import CALL_REQUESTS_TABLE, ORDERS_TABLE, SupabaseStore


def _check_table(client, name: str) -> Dict[str, Any]:
    try:
        res = client.table(name).select("*").limit(1).execute()
        cnt = len(res.data or [])
        return {"ok": True, "rows": cnt}
    except Exception as e:
        return {"ok": False, "error": str(e)}


def store_health_info(store: SupabaseStore) -> Dict[str, Any]:
    """
    Diagnostic de la base: résolution DNS de l'hôte Supabase puis lecture d'une ligne par table.
    Ne lève jamais: les erreurs sont rapportées dans le dict.
    """
    parsed = urlparse(store.url) if store.url else None
    hostname = parsed.hostname if parsed else None
    dns_ok = None
    dns_error = None
    if hostname:
        try:
            socket.getaddrinfo(hostname, 443)
            dns_ok = True
        except OSError as e:
            dns_ok = False
            dns_error = str(e)

    info: Dict[str, Any] = {
        "supabase_url": store.url,
        "hostname": hostname,
        "dns_ok": dns_ok,
        "dns_error": dns_error,
        "connect_ok": False,
        "error": None,
        "tables": {},
    }
    try:
        client = store.client()
        for t in [ORDERS_TABLE, CALL_REQUESTS_TABLE]:
            info["tables"][t] = _check_table(client, t)
        info["connect_ok"] = True
    except Exception as e:
        info["error"] = str(e)
    return info
