"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, lecture de session Stripe, client Stripe, repository BD, et services.
"""

from .cart import unique_item_ids, make_line_item, to_line_items, make_metadata
from .metadata import extract_line_items, extract_customer_email, extract_amount
from .stripe_client import require_stripe, create_session, get_session
from .repository import insert_order
from .service import create_checkout, verify_session, resolve_entry, build_success_url

__all__ = [
    # cart
    "unique_item_ids",
    "make_line_item",
    "to_line_items",
    "make_metadata",
    # metadata
    "extract_line_items",
    "extract_customer_email",
    "extract_amount",
    # stripe
    "require_stripe",
    "create_session",
    "get_session",
    # repository
    "insert_order",
    # services
    "create_checkout",
    "verify_session",
    "resolve_entry",
    "build_success_url",
]
