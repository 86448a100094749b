"""
Logique de prix pure (pas de Stripe, pas de HTTP).
Tous les montants sont en centimes (unité mineure USD).
"""
import math
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import Coupon

# Tables figées au déploiement
PACKAGE_PRICES: Mapping[str, int] = MappingProxyType({
    "1": 2999,
    "2": 4995,
    "3": 6700,
})
DEFAULT_PACKAGE_PRICE = 4995

UPGRADE_PRICES: Mapping[str, int] = MappingProxyType({
    "upsell-1": 1999,
    "upsell-2": 999,
})
UPGRADE_FLAGS: Mapping[str, str] = MappingProxyType({
    "upsell-1": "lifetime_protection",
    "upsell-2": "priority_handling",
})

CURRENCY = "usd"

# Montant minimal accepté par Stripe
MIN_CHARGE_AMOUNT = 50

# module checkout.payments.pricing
def package_key(package_id: Any) -> Optional[str]:
    """
    Normalise l'identifiant de package en clé de table.
    - 2 et "2" désignent le même package; 2.0 aussi.
    - None reste None (package absent).
    """
    if package_id is None:
        return None
    if isinstance(package_id, bool):
        return str(package_id).lower()
    if isinstance(package_id, float) and package_id.is_integer():
        return str(int(package_id))
    return str(package_id)

def base_price(package_id: Any) -> int:
    """
    Prix du package en centimes.
    Retombe sur le prix du package intermédiaire (4995) si l'id est inconnu ou absent.
    """
    key = package_key(package_id)
    if key is None:
        return DEFAULT_PACKAGE_PRICE
    return PACKAGE_PRICES.get(key, DEFAULT_PACKAGE_PRICE)

def upgrades_total(upgrades: Optional[Iterable[str]]) -> Tuple[int, Dict[str, bool]]:
    """
    Somme des options + drapeaux associés.
    - Chaque occurrence compte (pas de dédoublonnage).
    - Une option inconnue vaut 0.
    Retour: (surcharge_en_centimes, {"lifetime_protection": bool, "priority_handling": bool})
    """
    flags = {flag: False for flag in UPGRADE_FLAGS.values()}
    total = 0
    for up_id in upgrades or []:
        total += UPGRADE_PRICES.get(up_id, 0)
        flag = UPGRADE_FLAGS.get(up_id)
        if flag:
            flags[flag] = True
    return total, flags

def find_coupon(coupons: Iterable[Coupon], code: str) -> Optional[Coupon]:
    """Premier coupon dont le nom ou l'id correspond au code (insensible à la casse)."""
    wanted = (code or "").upper()
    if not wanted:
        return None
    for coupon in coupons:
        if (coupon.name or "").upper() == wanted or (coupon.id or "").upper() == wanted:
            return coupon
    return None

def coupon_discount(coupon: Optional[Coupon], amount: int) -> int:
    """
    Remise en centimes pour un montant donné.
    percent_off prime sur amount_off; une valeur nulle ou 0 est ignorée.
    """
    if coupon is None:
        return 0
    if coupon.percent_off:
        # Calcul flottant conservé: les remises déjà facturées en dépendent (6700 à 29% -> 1942)
        return int(math.floor(amount * (coupon.percent_off / 100)))
    if coupon.amount_off:
        return int(coupon.amount_off)
    return 0

def apply_minimum(amount: int) -> int:
    return max(int(amount), MIN_CHARGE_AMOUNT)

def make_metadata(
    *,
    package_id: Any,
    upgrades: Optional[List[str]],
    size: Optional[str],
    coupon_code: Optional[str],
    flags: Dict[str, bool],
) -> Dict[str, str]:
    """
    Métadonnées attachées au PaymentIntent (toutes les valeurs en str, exigence Stripe).
    - package est omis quand le front n'envoie pas de packageId.
    """
    metadata: Dict[str, str] = {}
    key = package_key(package_id)
    if key is not None:
        metadata["package"] = key
    metadata.update({
        "upgrades": ", ".join(upgrades) if upgrades is not None else "none",
        "Customer_Size": size or "Not Selected",
        "Lifetime_Protection": str(bool(flags.get("lifetime_protection"))).lower(),
        "Priority_Handling": str(bool(flags.get("priority_handling"))).lower(),
        "Coupon_Applied": coupon_code or "none",
    })
    return metadata

def to_major_units(amount: int) -> float:
    """Centimes -> unités (ex: 2999 -> 29.99)."""
    return amount / 100
