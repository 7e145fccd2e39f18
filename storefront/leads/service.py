import logging
from datetime import datetime, timezone

from storefront.errors import ValidationError
from storefront.infra.supabase_client import SupabaseStore

from .models import CallRequestIn
from .repository import insert_call_request

logger = logging.getLogger(__name__)


def _clean(v) -> str:
    return (v or "").strip() if isinstance(v, str) else ""


def record_call_request(store: SupabaseStore, payload: CallRequestIn, require_company: bool = False) -> None:
    """
    Valide puis enregistre une demande d'appel (aucune déduplication).
    - ValidationError si name/email/goals (et company si exigée) sont absents ou vides.
    """
    row = {
        "name": _clean(payload.name),
        "email": _clean(payload.email),
        "goals": _clean(payload.goals),
        "company": _clean(payload.company) or None,
    }
    required = ["name", "email", "goals"] + (["company"] if require_company else [])
    missing = [f for f in required if not row[f]]
    if missing:
        raise ValidationError(f"Champs manquants: {', '.join(missing)}")

    row["created_at"] = datetime.now(timezone.utc).isoformat()
    insert_call_request(store, row)
    logger.info("leads.call_request recorded email=%s", row["email"])
