"""
Taxonomie d'erreurs du backend boutique.
- Chaque erreur porte un code HTTP; le handler global (app_setup.exceptions) les rend en JSON {"detail": ...}.
- Aucune erreur n'est rejouée en interne: l'appelant réessaie (ex: même session_id).
"""


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StorefrontError):
    """Entrée manquante ou vide (corrigeable par l'appelant)."""
    status_code = 400


class UpstreamError(StorefrontError):
    """Appel Stripe en échec."""
    status_code = 500


class PersistenceError(StorefrontError):
    """Base indisponible ou écriture refusée."""
    status_code = 500


class NotFoundError(StorefrontError):
    status_code = 404


class ForbiddenError(StorefrontError):
    status_code = 403
