import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from checkout.config import PAYMENT_RATE_LIMIT_TIMES, PAYMENT_RATE_LIMIT_SECONDS
from checkout.errors import ConfigurationError, InvalidPayloadError, PaymentGatewayError
from checkout.utils.rate_limit import optional_rate_limit
from checkout.payments import service as payments_service
from checkout.payments.models import CheckoutRequest
from checkout.payments.stripe_client import PaymentGateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/payments", tags=["Payments API"])
# Chemin historique de la fonction serverless, conservé pour les fronts existants
netlify_router = APIRouter(prefix="/.netlify/functions", tags=["Payments API"], include_in_schema=False)

# Toutes les méthodes sont routées ici: le 405 est produit par la vue, après le contrôle d'init
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_rate_limit = optional_rate_limit(times=PAYMENT_RATE_LIMIT_TIMES, seconds=PAYMENT_RATE_LIMIT_SECONDS)

# module checkout.payments.views
def get_payment_gateway(request: Request) -> PaymentGateway:
    """
    Retourne le gateway construit par create_app().
    Soulève ConfigurationError si l'initialisation a échoué (ex: clé Stripe absente).
    """
    init_error = getattr(request.app.state, "payments_init_error", None)
    if init_error:
        raise ConfigurationError(init_error)
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        raise ConfigurationError("Payment gateway not configured")
    return gateway

def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)

async def read_checkout_request(request: Request) -> CheckoutRequest:
    """
    Lit et valide le corps JSON.
    - JSON illisible ou non conforme -> InvalidPayloadError (400 côté vue).
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidPayloadError(f"Invalid JSON body ({e})") from e
    try:
        return CheckoutRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidPayloadError(_validation_message(e)) from e

async def create_payment_intent(request: Request):
    """
    Calcule le total côté serveur et crée un PaymentIntent Stripe.
    - Entrée JSON: { "items": { "packageId", "upgrades"?, "size"?, "coupon"? }, "email"? }
    - Étapes:
      1) Contrôle d'initialisation (gateway configuré) -> 500 "Init Error: ..."
      2) Méthode POST uniquement -> 405 texte "Method Not Allowed"
      3) Lecture du corps -> 400 "Bad Request: ..." si invalide
      4) payments_service.create_payment_intent (prix, coupon, PaymentIntent)
    - Succès: {clientSecret, amount, discount} (montants en unités)
    - Erreurs Stripe: 500 "Server Error: <message Stripe>" (détails uniquement dans les logs)
    """
    try:
        gateway = get_payment_gateway(request)
    except ConfigurationError as e:
        logger.error("Initialization Error: %s", e)
        return JSONResponse({"error": f"Init Error: {e}"}, status_code=500)

    if request.method != "POST":
        return PlainTextResponse("Method Not Allowed", status_code=405)

    # Seuls les POST d'une app configurée consomment le quota (429 via HTTPException)
    await _rate_limit(request, Response())

    try:
        payload = await read_checkout_request(request)
        result = await run_in_threadpool(payments_service.create_payment_intent, payload, gateway)
        return JSONResponse(result)
    except InvalidPayloadError as e:
        logger.warning("payments.create_payment_intent invalid payload: %s", e)
        return JSONResponse({"error": f"Bad Request: {e}"}, status_code=400)
    except PaymentGatewayError as e:
        logger.exception("payments.create_payment_intent gateway error type=%s", e.error_type)
        return JSONResponse({"error": f"Server Error: {e.message}"}, status_code=500)
    except Exception as e:
        logger.exception("Erreur create_payment_intent")
        return JSONResponse({"error": f"Server Error: {e}"}, status_code=500)

router.add_api_route(
    "/create-payment-intent",
    create_payment_intent,
    methods=ALL_METHODS,
    name="create_payment_intent",
)
netlify_router.add_api_route(
    "/create-payment-intent",
    create_payment_intent,
    methods=ALL_METHODS,
    name="create_payment_intent_netlify",
)
