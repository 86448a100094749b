import pytest

from checkout.payments import (
    Coupon,
    base_price,
    upgrades_total,
    find_coupon,
    coupon_discount,
    apply_minimum,
    make_metadata,
    to_major_units,
)


@pytest.mark.parametrize("package_id, expected", [
    (1, 2999),
    (2, 4995),
    (3, 6700),
    ("1", 2999),   # même clé que 1
    ("3", 6700),
    (3.0, 6700),
])
def test_base_price_known_packages(package_id, expected):
    assert base_price(package_id) == expected


@pytest.mark.parametrize("package_id", [None, 0, 4, "premium", "", " 1 ", True, 2.5])
def test_base_price_unknown_defaults_to_mid_tier(package_id):
    assert base_price(package_id) == 4995


def test_upgrades_total_sums_each_occurrence():
    total, flags = upgrades_total(["upsell-1", "upsell-2", "upsell-1"])
    assert total == 1999 + 999 + 1999
    assert flags == {"lifetime_protection": True, "priority_handling": True}


def test_upgrades_total_unknown_ids_cost_nothing():
    total, flags = upgrades_total(["gift-wrap", "upsell-2"])
    assert total == 999
    assert flags["lifetime_protection"] is False
    assert flags["priority_handling"] is True


@pytest.mark.parametrize("upgrades", [None, []])
def test_upgrades_total_empty(upgrades):
    total, flags = upgrades_total(upgrades)
    assert total == 0
    assert not any(flags.values())


def test_find_coupon_is_case_insensitive_on_name_and_id():
    coupons = [
        Coupon(id="SUMMER10", name="Summer Sale", percent_off=10),
        Coupon(id="abc123", name="WELCOME", amount_off=500),
    ]
    assert find_coupon(coupons, "summer10").id == "SUMMER10"
    assert find_coupon(coupons, "SUMMER sale").id == "SUMMER10"
    assert find_coupon(coupons, "welcome").id == "abc123"
    assert find_coupon(coupons, "ABC123").id == "abc123"
    assert find_coupon(coupons, "nope") is None


def test_find_coupon_tolerates_unnamed_coupons():
    coupons = [Coupon(id="NONAME", name=None, percent_off=5)]
    assert find_coupon(coupons, "noname").id == "NONAME"
    assert find_coupon(coupons, "") is None


def test_coupon_discount_percent_is_floored():
    assert coupon_discount(Coupon(id="p", percent_off=10), 10000) == 1000
    assert coupon_discount(Coupon(id="p", percent_off=10), 7993) == 799
    assert coupon_discount(Coupon(id="p", percent_off=12.5), 2999) == 374


@pytest.mark.parametrize("percent_off, expected", [
    (29, 1942),
    (57, 3818),
    (58, 3885),
])
def test_coupon_discount_keeps_float_rounding(percent_off, expected):
    # amount * p // 100 donnerait 1943 / 3819 / 3886
    assert coupon_discount(Coupon(id="p", percent_off=percent_off), 6700) == expected


def test_coupon_discount_amount_off_is_verbatim():
    assert coupon_discount(Coupon(id="a", amount_off=500), 10000) == 500
    assert coupon_discount(Coupon(id="a", amount_off=500), 100) == 500


def test_coupon_discount_percent_takes_precedence():
    coupon = Coupon(id="both", percent_off=50, amount_off=100)
    assert coupon_discount(coupon, 4000) == 2000


def test_coupon_discount_without_coupon_or_values():
    assert coupon_discount(None, 4995) == 0
    assert coupon_discount(Coupon(id="empty"), 4995) == 0


@pytest.mark.parametrize("amount, expected", [(-500, 50), (0, 50), (49, 50), (50, 50), (2999, 2999)])
def test_apply_minimum(amount, expected):
    assert apply_minimum(amount) == expected


def test_make_metadata_full_cart():
    metadata = make_metadata(
        package_id=2,
        upgrades=["upsell-1", "upsell-2"],
        size="L",
        coupon_code="SUMMER10",
        flags={"lifetime_protection": True, "priority_handling": True},
    )
    assert metadata == {
        "package": "2",
        "upgrades": "upsell-1, upsell-2",
        "Customer_Size": "L",
        "Lifetime_Protection": "true",
        "Priority_Handling": "true",
        "Coupon_Applied": "SUMMER10",
    }


def test_make_metadata_defaults():
    metadata = make_metadata(
        package_id=None,
        upgrades=None,
        size="",
        coupon_code=None,
        flags={"lifetime_protection": False, "priority_handling": False},
    )
    assert "package" not in metadata
    assert metadata["upgrades"] == "none"
    assert metadata["Customer_Size"] == "Not Selected"
    assert metadata["Lifetime_Protection"] == "false"
    assert metadata["Priority_Handling"] == "false"
    assert metadata["Coupon_Applied"] == "none"
    assert all(isinstance(v, str) for v in metadata.values())


def test_to_major_units():
    assert to_major_units(2999) == 29.99
    assert to_major_units(7993) == 79.93
    assert to_major_units(0) == 0
