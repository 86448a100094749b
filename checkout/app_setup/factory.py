"""
Factory d’application recommandée pour les entrypoints (ex: checkout.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
import logging
from typing import Optional

from fastapi import FastAPI

from checkout.config import StripeSettings, load_stripe_settings
from checkout.errors import ConfigurationError
from checkout.payments.stripe_client import PaymentGateway, StripeGateway
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

logger = logging.getLogger(__name__)


def configure_payments(
    app: FastAPI,
    settings: Optional[StripeSettings] = None,
    gateway: Optional[PaymentGateway] = None,
) -> None:
    """
    Construit le gateway de paiement une fois pour toutes.
    - gateway fourni (tests): utilisé tel quel.
    - sinon settings fourni ou lu depuis l’environnement (load_stripe_settings).
    En cas d’échec, l’erreur est mémorisée dans app.state.payments_init_error
    et l’endpoint de paiement répondra 500 "Init Error: ...".
    """
    app.state.payment_gateway = None
    app.state.payments_init_error = None
    try:
        if gateway is None:
            gateway = StripeGateway(settings or load_stripe_settings())
        app.state.payment_gateway = gateway
    except ConfigurationError as e:
        app.state.payments_init_error = str(e)
        logger.error("Initialization Error: %s", e)

def create_app(
    settings: Optional[StripeSettings] = None,
    gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      - configuration du gateway de paiement (Stripe)
      - middlewares de base et de sécurité
      - gestionnaire d’exceptions
      - tous les routers (payments, health)
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="Checkout API", lifespan=lifespan)
    configure_payments(app, settings=settings, gateway=gateway)
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
