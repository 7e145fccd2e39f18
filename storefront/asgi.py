"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: uvicorn, gunicorn -k uvicorn.workers.UvicornWorker) importe
  `storefront.asgi:app` pour servir l'application FastAPI.
- Toute la configuration de FastAPI (routes, middlewares, store, catalogue) est centralisée
  dans storefront.app_setup.factory, ce fichier ne fait qu'exposer l'instance `app`.
"""

from storefront.app import app
