"""
Route de téléchargement des fichiers livrables.
- Le nom est réduit à son basename et servi depuis DOWNLOADS_DIR uniquement.
- Liens signés: si DOWNLOAD_SIGNING_SECRET est défini, ?token=<jwt> est exigé (403 sinon).
"""
import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import FileResponse

from storefront import config
from .service import resolve_download_path, verify_download_token

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Downloads"])


@router.get("/download/{filename:path}")
def download_file(filename: str, token: Optional[str] = None):
    """
    Sert le fichier en pièce jointe (Content-Disposition: attachment; filename=<basename>).
    - 404 si absent (y compris après neutralisation d'un chemin ../..)
    - 403 si signature active et token manquant/invalide/expiré
    """
    path = resolve_download_path(config.DOWNLOADS_DIR, filename)
    if config.DOWNLOAD_SIGNING_SECRET:
        verify_download_token(token, path.name, config.DOWNLOAD_SIGNING_SECRET)
    logger.info("downloads.serve file=%s", path.name)
    return FileResponse(str(path), filename=path.name)
