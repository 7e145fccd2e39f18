from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from storefront.health.service import store_health_info
from storefront.infra.supabase_client import SupabaseStore, get_store
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root(request: Request):
    return {"ok": True, "rate_limit": rate_limit_health_info(request)}


@router.get("/store")
def health_store(store: SupabaseStore = Depends(get_store)):
    return JSONResponse(store_health_info(store))
