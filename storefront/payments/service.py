"""
Cas d'usage 'payments': orchestre cart, stripe, metadata, repository.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from storefront.catalog.service import Catalog, Entry
from storefront.downloads.service import build_download_url
from storefront.errors import UpstreamError, ValidationError
from storefront.infra.supabase_client import SupabaseStore

from . import cart
from . import metadata as meta
from . import repository
from . import stripe_client

logger = logging.getLogger(__name__)


def build_success_url(frontend_url: str, success_path: str) -> str:
    sep = "&" if "?" in success_path else "?"
    return f"{frontend_url}{success_path}{sep}session_id={{CHECKOUT_SESSION_ID}}"


def create_checkout(
    catalog: Catalog,
    *,
    bundle_id: Optional[str],
    items: Optional[List[Dict[str, Any]]],
    email: Optional[str],
    success_url: str,
    cancel_url: str,
    currency: str = "gbp",
) -> str:
    """
    Prépare la session Stripe à partir d'un bundle ou d'un panier et renvoie l'URL de paiement.
    - ValidationError si aucun article valide (Stripe n'est pas appelé).
    - UpstreamError si Stripe échoue ou ne renvoie pas d'URL.
    """
    line_items, catalog_ids = cart.to_line_items(catalog, bundle_id=bundle_id, items=items, currency=currency)
    session = stripe_client.create_session(
        line_items=line_items,
        success_url=success_url,
        cancel_url=cancel_url,
        metadata=cart.make_metadata(catalog_ids),
        customer_email=email,
    )
    url = session.get("url")
    if not url:
        raise UpstreamError("Session Stripe invalide")
    logger.info("payments.checkout session_id=%s items=%s", session.get("id"), catalog_ids)
    return url


def resolve_entry(catalog: Catalog, line: Dict[str, Optional[str]]) -> Optional[Entry]:
    """
    Retrouve l'entrée catalogue d'une ligne payée.
    - Par metadata catalog_id d'abord, puis par nom exact (sessions sans metadata).
    """
    entry = catalog.find_by_id(line.get("catalog_id")) if line.get("catalog_id") else None
    return entry or catalog.find_by_name(line.get("description") or "")


def verify_session(
    store: SupabaseStore,
    catalog: Catalog,
    session_id: str,
    *,
    backend_url: str,
    signing_secret: str = "",
    link_ttl_seconds: int = 0,
) -> Dict[str, Any]:
    """
    Vérifie le paiement d'une session Stripe, enregistre la commande (une seule fois) et
    renvoie les liens de téléchargement.
    - Non payée: {"success": False} sans écriture.
    - Payée: insertion idempotente (contrainte unique sur session_id), puis
      {"success": True, "items": [{"name", "downloadUrl"}, ...]}; lignes non résolues omises.
    """
    if not session_id:
        raise ValidationError("sessionId manquant")

    session = stripe_client.get_session(session_id)
    payment_status = session.get("payment_status") or ""
    if payment_status != "paid":
        logger.info("payments.verify not paid session_id=%s payment_status=%s", session_id, payment_status)
        return {"success": False, "payment_status": payment_status}

    lines = meta.extract_line_items(session)
    resolved = [(line, resolve_entry(catalog, line)) for line in lines]

    order = {
        "session_id": session.get("id") or session_id,
        "email": meta.extract_customer_email(session),
        "amount": meta.extract_amount(session),
        "items": [line.get("description") for line in lines],
        "catalog_ids": [entry.id for _, entry in resolved if entry],
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    created = repository.insert_order(store, order)
    logger.info("payments.verify session_id=%s order_created=%s", order["session_id"], created)

    downloads: List[Dict[str, str]] = []
    for line, entry in resolved:
        if not entry or not entry.file:
            continue
        downloads.append({
            "name": line.get("description") or entry.name,
            "downloadUrl": build_download_url(backend_url, entry.file, signing_secret, link_ttl_seconds),
        })
    return {"success": True, "items": downloads}
