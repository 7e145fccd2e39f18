# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du backend boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Stripe, Supabase)
- Expose les URLs publiques (front pour les redirections Checkout, back pour les téléchargements)
- Expose les chemins utiles (DOWNLOADS_DIR, CATALOG_PATH)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info")

# Stripe: clé secrète (serveur uniquement) et devise des line_items
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
CURRENCY = _clean_env(os.getenv("CURRENCY") or "gbp").lower()

# Supabase: URL + clé service (écritures serveur sur orders / call_requests)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# URLs publiques: le front reçoit les redirections Checkout, le back sert les fichiers
FRONTEND_URL = _clean_env(os.getenv("FRONTEND_URL") or "http://localhost:5173").rstrip("/")
BACKEND_URL = _clean_env(os.getenv("BACKEND_URL") or f"http://localhost:{PORT}").rstrip("/")

# Pages de succès/annulation du checkout (côté front)
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/success")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/cart")

# CORS: origines du front autorisées
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,https://founders-academy-front.vercel.app").split(",")
    if o.strip()
]

# Sécurité transport: HSTS + redirection https derrière proxy
FORCE_HTTPS = _flag("FORCE_HTTPS")

# Fichiers livrables et catalogue
DOWNLOADS_DIR = Path(_clean_env(os.getenv("DOWNLOADS_DIR") or "") or (BASE_DIR / "pdfs"))
CATALOG_PATH = _clean_env(os.getenv("CATALOG_PATH") or "") or None

# Liens de téléchargement signés (désactivés si aucun secret)
DOWNLOAD_SIGNING_SECRET = _clean_env(os.getenv("DOWNLOAD_SIGNING_SECRET") or "")
DOWNLOAD_LINK_TTL_SECONDS = int(os.getenv("DOWNLOAD_LINK_TTL_SECONDS", str(7 * 24 * 3600)))

# Formulaire "request a call": société obligatoire ou non
CALL_REQUEST_REQUIRE_COMPANY = _flag("CALL_REQUEST_REQUIRE_COMPANY")
