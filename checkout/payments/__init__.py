"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique de prix, modèles, client Stripe et cas d'usage.
"""

from .models import CartItems, CheckoutRequest, Coupon, PricedOrder
from .pricing import (
    PACKAGE_PRICES,
    UPGRADE_PRICES,
    DEFAULT_PACKAGE_PRICE,
    MIN_CHARGE_AMOUNT,
    base_price,
    upgrades_total,
    find_coupon,
    coupon_discount,
    apply_minimum,
    make_metadata,
    to_major_units,
)
from .stripe_client import PaymentGateway, StripeGateway
from .service import lookup_discount, price_order, build_payment_intent_params, create_payment_intent

__all__ = [
    # models
    "CartItems",
    "CheckoutRequest",
    "Coupon",
    "PricedOrder",
    # pricing
    "PACKAGE_PRICES",
    "UPGRADE_PRICES",
    "DEFAULT_PACKAGE_PRICE",
    "MIN_CHARGE_AMOUNT",
    "base_price",
    "upgrades_total",
    "find_coupon",
    "coupon_discount",
    "apply_minimum",
    "make_metadata",
    "to_major_units",
    # stripe
    "PaymentGateway",
    "StripeGateway",
    # services
    "lookup_discount",
    "price_order",
    "build_payment_intent_params",
    "create_payment_intent",
]
