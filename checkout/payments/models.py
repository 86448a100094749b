"""
Modèles de la feature 'payments'.
- CartItems / CheckoutRequest: corps JSON reçu du front (validé par pydantic).
- Coupon: vue lecture seule d'un coupon Stripe.
- PricedOrder: résultat du calcul de prix côté serveur.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartItems(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # 1|2|3 attendus, toute autre valeur retombe sur le prix par défaut
    package_id: Optional[Any] = Field(default=None, alias="packageId")
    upgrades: Optional[List[str]] = None
    size: Optional[str] = None
    coupon: Optional[str] = None


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: CartItems
    email: Optional[str] = None


class Coupon(BaseModel):
    """Coupon Stripe (id, name, percent_off | amount_off). Jamais modifié ici."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    percent_off: Optional[float] = None
    amount_off: Optional[int] = None

    @classmethod
    def from_stripe(cls, obj: Any) -> "Coupon":
        # Les objets Stripe sont dict-compatibles
        if isinstance(obj, dict):
            return cls.model_validate(obj)
        to_dict = getattr(obj, "to_dict", None)
        return cls.model_validate(to_dict() if callable(to_dict) else dict(obj))


class PricedOrder(BaseModel):
    """Montants en centimes, calculés côté serveur."""
    subtotal: int
    discount: int = 0
    amount: int
    lifetime_protection: bool = False
    priority_handling: bool = False
    coupon: Optional[Coupon] = None

    def flags(self) -> Dict[str, bool]:
        return {
            "lifetime_protection": self.lifetime_protection,
            "priority_handling": self.priority_handling,
        }
