"""
Lecture tolérante des données d'une session Stripe Checkout (lignes, email, montant).
"""
from typing import Any, Dict, List, Optional


# module storefront.payments.metadata
def extract_line_items(session: Dict[str, Any]) -> List[Dict[str, Optional[str]]]:
    """
    Retourne [{"description": ..., "catalog_id": ...}, ...] depuis session["line_items"]["data"].
    - catalog_id est lu dans price.product.metadata (produit développé); None sinon.
    - Tolérant: structure absente => [].
    """
    line_items = (session or {}).get("line_items") or {}
    data = line_items.get("data") if isinstance(line_items, dict) else None
    result: List[Dict[str, Optional[str]]] = []
    for item in data or []:
        price = item.get("price") or {}
        product = price.get("product") if isinstance(price, dict) else None
        meta = (product.get("metadata") or {}) if isinstance(product, dict) else {}
        result.append({
            "description": item.get("description"),
            "catalog_id": meta.get("catalog_id") or None,
        })
    return result


def extract_customer_email(session: Dict[str, Any]) -> Optional[str]:
    """customer_details.email, sinon customer_email (valeur saisie à la création)."""
    details = (session or {}).get("customer_details") or {}
    return details.get("email") or (session or {}).get("customer_email") or None


def extract_amount(session: Dict[str, Any]) -> float:
    """amount_total (unité mineure) converti en unité majeure."""
    try:
        return int((session or {}).get("amount_total") or 0) / 100
    except (TypeError, ValueError):
        return 0.0
