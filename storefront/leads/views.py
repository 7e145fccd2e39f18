from fastapi import APIRouter, Depends

from storefront import config
from storefront.infra.supabase_client import SupabaseStore, get_store
from storefront.utils.rate_limit import optional_rate_limit

from .models import CallRequestIn
from .service import record_call_request

router = APIRouter(prefix="/api", tags=["Leads"])


@router.post("/request-call", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def request_call(payload: CallRequestIn, store: SupabaseStore = Depends(get_store)):
    """
    Formulaire "request a call".
    - Entrée JSON: {"name", "email", "goals", "company"?}
    - Erreurs: 400 si champ manquant, 500 si la base échoue
    """
    record_call_request(store, payload, require_company=config.CALL_REQUEST_REQUIRE_COMPANY)
    return {"success": True}
