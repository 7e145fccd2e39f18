"""
Lifespan FastAPI: démarrage/arrêt des ressources partagées.
- Contrôle que les fichiers livrables du catalogue sont présents dans DOWNLOADS_DIR (warning sinon).
- Initialise FastAPILimiter (Redis), ferme la connexion à l'arrêt.
- Variables d'environnement du rate limiting:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: aucune initialisation (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: fakeredis au lieu de Redis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: compteur mémoire si Redis est injoignable
"""
import os
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from storefront import config
from storefront.catalog.service import Catalog

logger = logging.getLogger(__name__)


def missing_deliverables(catalog: Catalog, directory: Path) -> List[str]:
    """Noms de fichiers référencés par le catalogue mais absents de `directory`."""
    entries = list(catalog.products.values()) + list(catalog.bundles.values())
    return sorted({e.file for e in entries if e.file and not (Path(directory) / e.file).is_file()})


async def init_rate_limiter(app: FastAPI) -> None:
    """
    Positionne app.state.rate_limit_enabled.
    - Redis injoignable sans fallback: rate limiting désactivé (l'API reste servie).
    """
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return

    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            from fakeredis.aioredis import FakeRedis  # tests only
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        app.state.rate_limit_enabled = os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1"
        if app.state.rate_limit_enabled:
            logger.warning("Rate limiting falling back to local in-memory due to init error: %s", e)
        else:
            logger.warning("Rate limiting disabled due to init error: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = missing_deliverables(app.state.catalog, config.DOWNLOADS_DIR)
    if missing:
        logger.warning("Fichiers livrables absents de %s: %s", config.DOWNLOADS_DIR, ", ".join(missing))

    await init_rate_limiter(app)
    yield
    if app.state.rate_limit_enabled and getattr(FastAPILimiter, "redis", None) is not None:
        await FastAPILimiter.close()
