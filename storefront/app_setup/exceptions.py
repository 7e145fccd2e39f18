"""
Gestionnaires d'exceptions.
- StorefrontError (et sous-classes): code HTTP porté par l'erreur, body JSON {"detail": ...}.
- RequestValidationError (body JSON invalide): 400 au lieu du 422 FastAPI, l'appelant corrige sa requête.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.errors import StorefrontError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers d'erreurs métier et de validation.
    - 4xx journalisées en warning, 5xx en error.
    """
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
        else:
            logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("%s %s -> 400 body invalide", request.method, request.url.path)
        return JSONResponse(status_code=400, content={"detail": "Requête invalide", "errors": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
