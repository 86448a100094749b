"""
Erreurs typées du service checkout.
Chaque phase de la requête a son propre type, la vue les traduit en réponses HTTP:
- ConfigurationError -> 500 "Init Error: ..."
- InvalidPayloadError -> 400 "Bad Request: ..."
- PaymentGatewayError -> 500 "Server Error: ..."
"""
from typing import Optional


class ConfigurationError(Exception):
    """Configuration absente ou invalide (ex: STRIPE_SECRET_KEY manquant)."""


class InvalidPayloadError(Exception):
    """Corps de requête illisible (JSON invalide) ou non conforme au modèle attendu."""


class PaymentGatewayError(Exception):
    """Échec d'un appel au processeur de paiement (Stripe)."""

    def __init__(self, message: str, error_type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
