"""
Factory d'application pour les entrypoints (storefront.asgi, storefront.app).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
import logging
from typing import Optional

from fastapi import FastAPI

from storefront import config
from storefront.catalog.service import Catalog, load_catalog
from storefront.infra.supabase_client import SupabaseStore
from storefront.logging import configure_logging
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_force_https_middleware
from .exceptions import register_exception_handlers
from .routes import register_routes
from .routers import register_routers

logger = logging.getLogger(__name__)


def create_app(store: Optional[SupabaseStore] = None, catalog: Optional[Catalog] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      1) logs, catalogue (chargé une fois, incohérences signalées) et store Supabase (connexion paresseuse)
      2) middlewares de base (CORS, proxy) et en-têtes de sécurité
      3) gestionnaires d'exceptions, routes simples et routers
      4) middleware HTTPS en dernier pour qu'il s'exécute en premier
    Paramètres store/catalog: injection explicite (tests, scripts); sinon construits depuis la config.
    """
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.catalog = catalog or load_catalog(config.CATALOG_PATH)
    for problem in app.state.catalog.validate():
        logger.warning("Catalogue incohérent: %s", problem)
    app.state.store = store or SupabaseStore(config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY)

    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
