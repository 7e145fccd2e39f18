"""
Logique panier pure (pas de Stripe, pas de DB).
"""
import json
from typing import Any, Dict, List, Optional, Tuple

from storefront.catalog.models import Product
from storefront.catalog.service import Catalog
from storefront.errors import ValidationError

# Limite Stripe d'une valeur de metadata
METADATA_VALUE_LIMIT = 500


# module storefront.payments.cart
def unique_item_ids(items: Optional[List[Dict[str, Any]]]) -> List[str]:
    """
    Extrait les IDs distincts d'un panier brut [{id}, ...], dans l'ordre d'apparition.
    - Les doublons sont fusionnés (un produit demandé deux fois = une seule ligne).
    - Ignore les lignes sans id.
    """
    seen: List[str] = []
    for it in items or []:
        if not isinstance(it, dict):
            continue
        item_id = str(it.get("id") or "").strip()
        if item_id and item_id not in seen:
            seen.append(item_id)
    return seen


def make_line_item(entry: Product, currency: str, kind: str) -> Dict[str, Any]:
    """
    Construit un line_item Stripe en price_data (quantité 1).
    - unit_amount en unité mineure.
    - product_data.metadata porte l'id catalogue pour la réconciliation après paiement.
    """
    return {
        "quantity": 1,
        "price_data": {
            "currency": currency,
            "unit_amount": entry.unit_amount,
            "product_data": {
                "name": entry.name,
                "metadata": {"catalog_id": entry.id, "kind": kind},
            },
        },
    }


def to_line_items(
    catalog: Catalog,
    *,
    bundle_id: Optional[str] = None,
    items: Optional[List[Dict[str, Any]]] = None,
    currency: str = "gbp",
) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Construit (line_items, catalog_ids) à partir d'un bundle ou d'une liste de produits.
    - bundle_id connu: une seule ligne au prix du bundle.
    - Sinon: une ligne par ID produit distinct présent au catalogue; IDs inconnus ignorés.
    - ValidationError si aucune ligne n'est construite.
    """
    line_items: List[Dict[str, Any]] = []
    catalog_ids: List[str] = []

    bundle = catalog.bundle(bundle_id) if bundle_id else None
    if bundle:
        line_items.append(make_line_item(bundle, currency, "bundle"))
        catalog_ids.append(bundle.id)
    else:
        for product_id in unique_item_ids(items):
            product = catalog.product(product_id)
            if not product:
                continue
            line_items.append(make_line_item(product, currency, "product"))
            catalog_ids.append(product.id)

    if not line_items:
        raise ValidationError("Aucun article sélectionné")
    return line_items, catalog_ids


def make_metadata(catalog_ids: List[str]) -> Dict[str, str]:
    """
    Métadonnées de session Stripe: cart = JSON des IDs catalogue.
    - Au-delà de la limite Stripe, les derniers IDs sont retirés (la valeur reste du JSON valide).
    """
    ids = list(catalog_ids)
    value = json.dumps(ids)
    while len(value) > METADATA_VALUE_LIMIT:
        ids.pop()
        value = json.dumps(ids)
    return {"cart": value}
