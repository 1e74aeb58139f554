"""Tests for catalog pricing."""

from decimal import Decimal

import pytest

from flask_paypal_checkout.catalog import PRICES, Catalog, parse_quantity
from flask_paypal_checkout.errors import InvalidProductError, InvalidQuantityError

DOG_BED = "cloudrest-cozy-dog-bed"


@pytest.fixture
def catalog():
    return Catalog()


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("size", ["S", "M", "L"])
@pytest.mark.parametrize("qty", [1, 2, 3, 7])
def test_total_is_unit_price_times_quantity(catalog, size, qty):
    quote = catalog.quote(DOG_BED, size=size, quantity=qty)
    assert quote.total == Decimal(PRICES[DOG_BED][size]) * qty
    assert quote.value == f"{Decimal(PRICES[DOG_BED][size]) * qty:.2f}"
    assert len(quote.value.split(".")[1]) == 2


def test_large_dog_bed_for_two(catalog):
    quote = catalog.quote(DOG_BED, size="L", quantity=2)
    assert quote.value == "119.98"
    assert quote.currency == "EUR"
    assert quote.description == "CloudRest Cozy Dog Bed (L)"


def test_whole_prices_keep_two_decimals():
    catalog = Catalog({"mat": {"M": "10"}})
    assert catalog.quote("mat", quantity=3).value == "30.00"


def test_total_rounds_half_up():
    catalog = Catalog({"treat": {"M": "0.125"}})
    assert catalog.quote("treat", quantity=1).value == "0.13"


# ---------------------------------------------------------------------------
# Defaults and fallbacks
# ---------------------------------------------------------------------------


def test_defaults_to_medium_and_single_item(catalog):
    quote = catalog.quote(DOG_BED)
    assert quote.size == "M"
    assert quote.quantity == 1
    assert quote.value == "49.99"


def test_unknown_size_falls_back_to_medium_price(catalog):
    quote = catalog.quote(DOG_BED, size="XXL", quantity=2)
    assert quote.unit_price == Decimal("49.99")
    assert quote.value == "99.98"
    # The requested size is still shown to the buyer.
    assert quote.description == "CloudRest Cozy Dog Bed (XXL)"


def test_non_string_size_is_treated_as_medium(catalog):
    quote = catalog.quote(DOG_BED, size=["L"])
    assert quote.size == "M"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("product_id", ["unknown-bed", "", None, 42, ["x"]])
def test_unknown_product_raises(catalog, product_id):
    with pytest.raises(InvalidProductError) as info:
        catalog.quote(product_id)
    assert info.value.status_code == 400
    assert info.value.to_dict() == {"error": "Invalid product"}


@pytest.mark.parametrize(
    "qty", [0, -1, 1.5, "two", "", True, [1], {}, "\u00b2", 1e300, 10**30, float("inf"), 1000]
)
def test_invalid_quantity_raises(catalog, qty):
    with pytest.raises(InvalidQuantityError):
        catalog.quote(DOG_BED, quantity=qty)


@pytest.mark.parametrize("raw, expected", [(None, 1), (2, 2), (3.0, 3), ("4", 4)])
def test_parse_quantity_accepts(raw, expected):
    assert parse_quantity(raw) == expected


def test_total_beyond_decimal_precision_is_invalid_quantity():
    catalog = Catalog({"gold-bed": {"M": "1e30"}})
    with pytest.raises(InvalidQuantityError):
        catalog.quote("gold-bed", quantity=999)


def test_catalog_requires_medium_fallback():
    with pytest.raises(ValueError, match="no 'M' price"):
        Catalog({"tiny-bed": {"S": "9.99"}})


def test_catalog_is_read_only(catalog):
    assert DOG_BED in catalog
    assert catalog.product_ids() == [DOG_BED]
    with pytest.raises(TypeError):
        catalog._prices[DOG_BED]["M"] = "0.01"


def test_missing_display_name_uses_product_id():
    catalog = Catalog({"blanket": {"M": "15.00"}}, names={})
    assert catalog.quote("blanket", size="M").description == "blanket (M)"
