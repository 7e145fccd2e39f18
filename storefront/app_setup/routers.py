"""
Registre central des routers.
- Paiements: /create-checkout-session, /api/verify-session
- Téléchargements: /download/{filename}
- Leads: /api/request-call
- Health: /health
"""
from fastapi import FastAPI
from storefront.payments import views as payments_views
from storefront.downloads import views as downloads_views
from storefront.leads import views as leads_views
from storefront.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(downloads_views.router)
    app.include_router(leads_views.router)
    # Health & monitoring
    app.include_router(health_router)
