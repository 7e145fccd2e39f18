"""
Catalogue en lecture seule (produits + bundles).
- Chargé une fois au démarrage (factory) puis partagé par toutes les requêtes via app.state.catalog.
- Source: données intégrées (catalog.data) ou fichier JSON {"products": {...}, "bundles": {...}}.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import Request

from .models import Bundle, Product
from . import data

logger = logging.getLogger(__name__)

Entry = Union[Product, Bundle]


class Catalog:
    def __init__(self, products: Dict[str, Product], bundles: Dict[str, Bundle]):
        self._products = dict(products)
        self._bundles = dict(bundles)

    @classmethod
    def from_dicts(cls, products: Dict[str, Dict[str, Any]], bundles: Dict[str, Dict[str, Any]]) -> "Catalog":
        return cls(
            {pid: Product(id=pid, **p) for pid, p in (products or {}).items()},
            {bid: Bundle(id=bid, **b) for bid, b in (bundles or {}).items()},
        )

    @property
    def products(self) -> Dict[str, Product]:
        return dict(self._products)

    @property
    def bundles(self) -> Dict[str, Bundle]:
        return dict(self._bundles)

    def product(self, product_id: str) -> Optional[Product]:
        return self._products.get(str(product_id or ""))

    def bundle(self, bundle_id: str) -> Optional[Bundle]:
        return self._bundles.get(str(bundle_id or ""))

    def find_by_id(self, catalog_id: str) -> Optional[Entry]:
        """Bundle d'abord, puis produit."""
        return self.bundle(catalog_id) or self.product(catalog_id)

    def find_by_name(self, name: str) -> Optional[Entry]:
        """
        Correspondance exacte sur le nom affiché (bundles avant produits).
        Utilisé pour les sessions Stripe créées sans metadata catalog_id.
        """
        if not name:
            return None
        for bundle in self._bundles.values():
            if bundle.name == name:
                return bundle
        for product in self._products.values():
            if product.name == name:
                return product
        return None

    def validate(self) -> List[str]:
        """
        Vérifie que chaque produit référencé par un bundle existe.
        Retourne la liste des problèmes (vide si le catalogue est cohérent).
        """
        problems: List[str] = []
        for bundle in self._bundles.values():
            for pid in bundle.items:
                if pid not in self._products:
                    problems.append(f"bundle '{bundle.id}' référence un produit inconnu '{pid}'")
        return problems


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """
    Construit le catalogue.
    - path None: données intégrées.
    - path fourni: fichier JSON; une erreur de lecture/parsing est propagée (démarrage impossible).
    """
    if not path:
        return Catalog.from_dicts(data.PRODUCTS, data.BUNDLES)
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    catalog = Catalog.from_dicts(raw.get("products") or {}, raw.get("bundles") or {})
    logger.info("Catalogue chargé depuis %s (%d produits, %d bundles)", path, len(catalog.products), len(catalog.bundles))
    return catalog


def get_catalog(request: Request) -> Catalog:
    """Dépendance FastAPI: le catalogue chargé au démarrage."""
    return request.app.state.catalog
