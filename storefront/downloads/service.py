"""
Logique téléchargements: résolution sûre du chemin et liens (optionnellement signés).
- Le nom demandé est réduit à son basename puis résolu dans un répertoire fixe (anti path traversal).
- Si DOWNLOAD_SIGNING_SECRET est défini, chaque lien porte un token JWT (HS256) lié au fichier et expirant.
"""
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import jwt

from storefront.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


def safe_filename(filename: str) -> str:
    """
    Supprime toute composante de répertoire ("/" et "\\").
    Ex: "../../etc/passwd" -> "passwd"
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    if name in ("", ".", ".."):
        return ""
    return name


def resolve_download_path(directory: Path, filename: str) -> Path:
    """
    Résout le fichier demandé sous `directory`.
    - NotFoundError si le nom est vide après nettoyage ou si le fichier n'existe pas.
    """
    name = safe_filename(filename)
    if not name:
        raise NotFoundError("Fichier introuvable")
    path = Path(directory) / name
    if not path.is_file():
        raise NotFoundError("Fichier introuvable")
    return path


def sign_download_token(filename: str, secret: str, ttl_seconds: int, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {"file": filename, "exp": now + timedelta(seconds=ttl_seconds)}
    return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)


def verify_download_token(token: Optional[str], filename: str, secret: str) -> None:
    """
    Vérifie qu'un token est valide, non expiré, et émis pour ce fichier précis.
    - ForbiddenError sinon.
    """
    if not token:
        raise ForbiddenError("Lien de téléchargement non signé")
    try:
        payload = jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ForbiddenError("Lien de téléchargement expiré")
    except jwt.InvalidTokenError:
        raise ForbiddenError("Lien de téléchargement invalide")
    if payload.get("file") != filename:
        raise ForbiddenError("Lien de téléchargement invalide")


def build_download_url(base_url: str, filename: str, secret: str = "", ttl_seconds: int = 0) -> str:
    """
    URL publique (backend) d'un fichier livrable: {base_url}/download/{filename}
    - Le nom est encodé (espaces, etc.).
    - Avec un secret: ajoute ?token=<jwt>.
    """
    url = f"{base_url.rstrip('/')}/download/{quote(filename)}"
    if secret:
        url += f"?token={sign_download_token(filename, secret, ttl_seconds)}"
    return url
