"""
Adaptateur Stripe: centralise les appels au processeur de paiement.
Le service ne dépend que de la capacité PaymentGateway (list_coupons, create_payment_intent),
ce qui permet de lui substituer un double en tests.
"""
from typing import Any, Dict, List, Protocol

import stripe

from checkout.config import StripeSettings
from checkout.errors import PaymentGatewayError
from .models import Coupon


class PaymentGateway(Protocol):
    def list_coupons(self) -> List[Coupon]:
        ...

    def create_payment_intent(self, params: Dict[str, Any]) -> Dict[str, Any]:
        ...


def _gateway_message(exc: Exception) -> str:
    # user_message est le message renvoyé par l'API Stripe, sans l'identifiant de requête
    return getattr(exc, "user_message", None) or str(exc) or exc.__class__.__name__

# module checkout.payments.stripe_client
class StripeGateway:
    """
    Gateway Stripe configuré explicitement (clé passée à chaque appel via api_key).
    - Aucune mutation de stripe.api_key global.
    - Aucun retry: un appel = une requête.
    """

    def __init__(self, settings: StripeSettings):
        self.settings = settings

    def list_coupons(self) -> List[Coupon]:
        """
        Liste tous les coupons du compte (pagination automatique).
        Les erreurs Stripe remontent telles quelles: l'appelant décide de les absorber.
        """
        page = stripe.Coupon.list(limit=100, api_key=self.settings.secret_key)
        return [Coupon.from_stripe(c) for c in page.auto_paging_iter()]

    def create_payment_intent(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crée un PaymentIntent.
        - params: amount (centimes), currency, metadata, automatic_payment_methods, receipt_email?
        Retour: dict incluant "id" et "client_secret".
        Soulève PaymentGatewayError si Stripe refuse ou est injoignable.
        """
        try:
            intent = stripe.PaymentIntent.create(api_key=self.settings.secret_key, **params)
        except stripe.StripeError as e:
            raise PaymentGatewayError(_gateway_message(e), error_type=e.__class__.__name__) from e
        # stripe retourne un objet; on le traite comme dict-compatible
        return dict(intent)
