"""
Point d'entrée principal pour le backend FastAPI.

Usage:
    python -m storefront

Ce mode lance uvicorn directement et lit quelques variables d'environnement:
- PORT: port d'écoute (par défaut 8000)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
"""
import os
import uvicorn

from storefront import config

if __name__ == "__main__":
    # Activer le reload uniquement si explicitement demandé (ex: en local)
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    uvicorn.run(
        "storefront.asgi:app",  # on réutilise l'ASGI app unique
        host="0.0.0.0",
        port=config.PORT,
        reload=reload_flag,
        log_level=config.LOG_LEVEL,
    )
