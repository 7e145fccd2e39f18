import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from storefront import config
from storefront.catalog.service import Catalog, get_catalog
from storefront.infra.supabase_client import SupabaseStore, get_store
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[Dict[str, Any]] = Field(default_factory=list)
    bundle_id: Optional[str] = Field(None, alias="bundleId")
    email: Optional[str] = None


class VerifySessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field("", alias="sessionId")


# module storefront.payments.views
@router.post("/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_checkout_session(payload: CheckoutRequest, catalog: Catalog = Depends(get_catalog)):
    """
    Crée une session Checkout Stripe pour un bundle ou un panier de produits.
    - Entrée JSON: {"bundleId": "<id>"} ou {"items": [{"id": "<produit>"}, ...]}, + "email"
    - Étapes:
      1) Construire les line_items (bundle prioritaire, IDs dédoublonnés, inconnus ignorés)
      2) Créer la session Stripe (redirections vers le front) et renvoyer {url}
    - Erreurs: 400 si aucun article, 500 si Stripe échoue
    """
    url = payments_service.create_checkout(
        catalog,
        bundle_id=payload.bundle_id,
        items=payload.items,
        email=payload.email,
        success_url=payments_service.build_success_url(config.FRONTEND_URL, config.CHECKOUT_SUCCESS_PATH),
        cancel_url=f"{config.FRONTEND_URL}{config.CHECKOUT_CANCEL_PATH}",
        currency=config.CURRENCY,
    )
    return {"url": url}


@router.post("/api/verify-session")
def verify_session(
    payload: VerifySessionRequest,
    store: SupabaseStore = Depends(get_store),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Confirme le paiement d'une session Stripe et livre les liens de téléchargement.
    - Entrée JSON: {"sessionId": "cs_..."}
    - Enregistre la commande une seule fois par session (rejouable sans doublon)
    - Réponses: {"success": true, "items": [{"name", "downloadUrl"}]}
      ou 400 {"success": false, "message": ...} si non payée
    - Erreurs: 500 si Stripe ou la base échouent
    """
    result = payments_service.verify_session(
        store,
        catalog,
        payload.session_id,
        backend_url=config.BACKEND_URL,
        signing_secret=config.DOWNLOAD_SIGNING_SECRET,
        link_ttl_seconds=config.DOWNLOAD_LINK_TTL_SECONDS,
    )
    if not result.get("success"):
        return JSONResponse(status_code=400, content={"success": False, "message": "Paiement non vérifié"})
    return result
