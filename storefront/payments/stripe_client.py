"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import logging
from typing import Any, Dict, List, Optional

import stripe

from storefront import config
from storefront.errors import UpstreamError

logger = logging.getLogger(__name__)

# Expansion nécessaire pour relire les lignes et la metadata produit après paiement
SESSION_EXPAND = ["line_items", "line_items.data.price.product"]


# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - UpstreamError si la clé est absente (aucun appel ne pourrait aboutir).
    """
    if not config.STRIPE_SECRET_KEY:
        raise UpstreamError("STRIPE_SECRET_KEY manquant")
    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe


def to_dict(obj: Any) -> Dict[str, Any]:
    # stripe retourne un StripeObject; on le convertit récursivement en dict
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return obj
    if hasattr(obj, "to_dict_recursive"):
        return obj.to_dict_recursive()
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def create_session(
    *,
    line_items: List[Dict[str, Any]],
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, Any],
    customer_email: Optional[str] = None,
    mode: str = "payment",
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout.
    - line_items: lignes Stripe en price_data
    - success_url / cancel_url: URLs de redirection (front)
    - customer_email: pré-rempli sur la page Stripe si fourni
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
    """
    require_stripe()
    params: Dict[str, Any] = {
        "payment_method_types": ["card"],
        "mode": mode,
        "line_items": line_items,
        "success_url": success_url,
        "cancel_url": cancel_url,
        "metadata": metadata,
    }
    if customer_email:
        params["customer_email"] = customer_email
    try:
        session = stripe.checkout.Session.create(**params)
    except stripe.StripeError as e:
        logger.exception("Stripe create_session failed")
        raise UpstreamError(getattr(e, "user_message", None) or str(e)) from e
    return to_dict(session)


def get_session(session_id: str) -> Dict[str, Any]:
    """
    Récupère une session Stripe Checkout avec ses line_items (et produits) développés.
    Retour: dict session incluant "id", "payment_status", "amount_total", "customer_details", "line_items".
    """
    require_stripe()
    try:
        session = stripe.checkout.Session.retrieve(session_id, expand=SESSION_EXPAND)
    except stripe.StripeError as e:
        logger.exception("Stripe get_session failed session_id=%s", session_id)
        raise UpstreamError(getattr(e, "user_message", None) or str(e)) from e
    return to_dict(session)
