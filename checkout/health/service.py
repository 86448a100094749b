from typing import Any, Dict
from fastapi import FastAPI


def health_stripe_info(app: FastAPI) -> Dict[str, Any]:
    """
    État de la configuration Stripe, sans jamais exposer la clé.
    - configured: gateway construit au démarrage
    - error: message d'initialisation si la configuration a échoué
    """
    init_error = getattr(app.state, "payments_init_error", None)
    gateway = getattr(app.state, "payment_gateway", None)
    return {
        "configured": gateway is not None and not init_error,
        "error": init_error or None,
    }
