# ===================================
# ecommerce_api/core/exceptions.py
# ===================================
"""
Erreurs métier de l'application.

Les services et repositories lèvent ces exceptions, les gestionnaires
enregistrés dans ``main.py`` les traduisent en réponses HTTP.
"""

from typing import Dict, Optional


class AppError(Exception):
    """Erreur métier de base"""

    status_code: int = 500
    error_type: str = "internal_error"
    default_message: str = "Erreur interne du serveur"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class NotFound(AppError):
    """Identifiant introuvable"""
    status_code = 404
    error_type = "not_found"
    default_message = "Ressource non trouvée"


class InvalidReference(AppError):
    """Clé étrangère vers une ligne inexistante"""
    status_code = 400
    error_type = "invalid_reference"
    default_message = "Référence invalide"


class InsufficientStock(AppError):
    """Quantité demandée supérieure au stock disponible"""
    status_code = 400
    error_type = "insufficient_stock"
    default_message = "Stock insuffisant"


class ValidationFailed(AppError):
    status_code = 400
    error_type = "validation_error"
    default_message = "Données invalides"


class ConcurrencyConflict(AppError):
    """Écriture obsolète détectée par la base"""
    status_code = 409
    error_type = "concurrency_conflict"
    default_message = "Conflit de mise à jour concurrente, veuillez réessayer"


class Unauthenticated(AppError):
    status_code = 401
    error_type = "unauthenticated"
    default_message = "Impossible de valider les credentials"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403
    error_type = "forbidden"
    default_message = "Accès refusé"
