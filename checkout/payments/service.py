"""
Cas d'usage 'payments': calcule le prix côté serveur puis demande l'autorisation à Stripe.
Orchestration: pricing (tables) -> coupon (gateway, best-effort) -> PaymentIntent (gateway, une fois).
"""
import logging
from typing import Any, Dict, Optional, Tuple

from . import pricing
from .models import CartItems, CheckoutRequest, Coupon, PricedOrder
from .stripe_client import PaymentGateway

logger = logging.getLogger(__name__)

# module checkout.payments.service
def lookup_discount(gateway: PaymentGateway, coupon_code: str, amount: int) -> Tuple[int, Optional[Coupon]]:
    """
    Cherche le coupon dans le registre Stripe et calcule la remise.
    Toute erreur (réseau, API, donnée inattendue) est absorbée: remise 0, warning loggué.
    """
    try:
        coupon = pricing.find_coupon(gateway.list_coupons(), coupon_code)
        return pricing.coupon_discount(coupon, amount), coupon
    except Exception as e:
        logger.warning("Coupon verification failed, proceeding without discount: %s", e)
        return 0, None

def price_order(cart: CartItems, gateway: PaymentGateway) -> PricedOrder:
    """
    Montant dû en centimes: package + options - remise, jamais sous le minimum Stripe.
    """
    subtotal = pricing.base_price(cart.package_id)
    surcharge, flags = pricing.upgrades_total(cart.upgrades)
    subtotal += surcharge

    discount, coupon = 0, None
    if cart.coupon:
        discount, coupon = lookup_discount(gateway, cart.coupon, subtotal)

    return PricedOrder(
        subtotal=subtotal,
        discount=discount,
        amount=pricing.apply_minimum(subtotal - discount),
        coupon=coupon,
        **flags,
    )

def build_payment_intent_params(cart: CartItems, email: Optional[str], order: PricedOrder) -> Dict[str, Any]:
    """
    Paramètres du PaymentIntent (construits à neuf à chaque requête).
    receipt_email n'est ajouté que pour un email non vide (après trim).
    """
    params: Dict[str, Any] = {
        "amount": order.amount,
        "currency": pricing.CURRENCY,
        "metadata": pricing.make_metadata(
            package_id=cart.package_id,
            upgrades=cart.upgrades,
            size=cart.size,
            coupon_code=cart.coupon,
            flags=order.flags(),
        ),
        "automatic_payment_methods": {"enabled": True},
    }
    receipt_email = (email or "").strip()
    if receipt_email:
        params["receipt_email"] = receipt_email
    return params

def create_payment_intent(payload: CheckoutRequest, gateway: PaymentGateway) -> Dict[str, Any]:
    """
    Calcule la commande et crée le PaymentIntent (un seul appel, pas de retry).
    Retour: {"clientSecret", "amount", "discount"} (montants en unités, ex: 29.99).
    Les erreurs du gateway (PaymentGatewayError) remontent à la vue.
    """
    cart = payload.items
    order = price_order(cart, gateway)
    params = build_payment_intent_params(cart, payload.email, order)
    intent = gateway.create_payment_intent(params)
    logger.info(
        "payments.create_payment_intent id=%s amount=%s discount=%s package=%s",
        intent.get("id"), order.amount, order.discount, params["metadata"].get("package"),
    )
    return {
        "clientSecret": intent.get("client_secret"),
        "amount": pricing.to_major_units(order.amount),
        "discount": pricing.to_major_units(order.discount),
    }
