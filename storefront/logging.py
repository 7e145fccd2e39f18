"""
Configuration des logs applicatifs.
- Les modules utilisent logging.getLogger(__name__) sous le logger racine 'storefront'.
- uvicorn garde ses propres handlers (uvicorn.error / uvicorn.access).
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> None:
    """
    Attache un handler console au logger 'storefront' (une seule fois).
    - level: niveau texte ("debug", "info", ...); valeur inconnue => INFO.
    """
    logger = logging.getLogger("storefront")
    logger.setLevel(getattr(logging, (level or "info").upper(), logging.INFO))
    if not any(getattr(h, "_storefront", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        logger.addHandler(handler)
