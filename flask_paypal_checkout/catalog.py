"""Fixed product catalog and order pricing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

from flask_paypal_checkout.errors import InvalidProductError, InvalidQuantityError

CURRENCY = "EUR"
DEFAULT_SIZE = "M"
DEFAULT_QUANTITY = 1
MAX_QUANTITY = 999

_CENTS = Decimal("0.01")

#: product id -> size code -> unit price
PRICES: Mapping[str, Mapping[str, str]] = {
    "cloudrest-cozy-dog-bed": {"S": "39.99", "M": "49.99", "L": "59.99"},
}

#: product id -> name shown in the PayPal order description
PRODUCT_NAMES: Mapping[str, str] = {
    "cloudrest-cozy-dog-bed": "CloudRest Cozy Dog Bed",
}


@dataclass(frozen=True)
class Quote:
    """Price breakdown for one order request."""

    product_id: str
    name: str
    size: str
    quantity: int
    unit_price: Decimal
    total: Decimal
    currency: str = CURRENCY

    @property
    def value(self) -> str:
        """Total formatted with exactly two decimals, as PayPal expects."""
        return f"{self.total:.2f}"

    @property
    def description(self) -> str:
        return f"{self.name} ({self.size})"


def parse_quantity(raw: Any) -> int:
    """Return *raw* as a positive ``int`` or raise :class:`InvalidQuantityError`.

    ``None`` means the default quantity. Integral floats (``2.0``) and decimal
    digit strings (``"2"``) are accepted; booleans are not. Quantities above
    :data:`MAX_QUANTITY` are rejected.
    """
    if raw is None:
        return DEFAULT_QUANTITY
    if isinstance(raw, bool):
        raise InvalidQuantityError()
    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidQuantityError()
        raw = int(raw)
    elif isinstance(raw, str):
        if not raw.strip().isdecimal():
            raise InvalidQuantityError()
        try:
            raw = int(raw)
        except ValueError:
            raise InvalidQuantityError() from None
    if not isinstance(raw, int) or not 1 <= raw <= MAX_QUANTITY:
        raise InvalidQuantityError()
    return raw


class Catalog:
    """Read-only product catalog.

    Args:
        prices: ``{product_id: {size: price}}`` with prices as decimal
            strings. Every product must have an ``"M"`` entry, which is the
            fallback for unknown sizes.
        names: Optional display names; the product id is used when a name
            is missing.
    """

    def __init__(
        self,
        prices: Mapping[str, Mapping[str, str]] | None = None,
        names: Mapping[str, str] | None = None,
    ) -> None:
        source = PRICES if prices is None else prices
        for product_id, table in source.items():
            if DEFAULT_SIZE not in table:
                raise ValueError(
                    f"Product {product_id!r} has no {DEFAULT_SIZE!r} price to fall back to."
                )
        self._prices = MappingProxyType(
            {pid: MappingProxyType(dict(table)) for pid, table in source.items()}
        )
        self._names = MappingProxyType(dict(PRODUCT_NAMES if names is None else names))

    def __contains__(self, product_id: object) -> bool:
        return isinstance(product_id, str) and product_id in self._prices

    def product_ids(self) -> list[str]:
        return list(self._prices)

    def name(self, product_id: str) -> str:
        return self._names.get(product_id, product_id)

    def unit_price(self, product_id: str, size: str | None = None) -> Decimal:
        """Return the unit price for *size*, falling back to ``"M"``."""
        if not isinstance(product_id, str) or product_id not in self._prices:
            raise InvalidProductError()
        table = self._prices[product_id]
        return Decimal(table.get(size or DEFAULT_SIZE) or table[DEFAULT_SIZE])

    def quote(self, product_id: str, *, size: str | None = None, quantity: Any = None) -> Quote:
        """Price an order request.

        Raises:
            InvalidProductError: *product_id* is unknown.
            InvalidQuantityError: *quantity* is not an integer between 1 and
                :data:`MAX_QUANTITY`, or the total cannot be represented.
        """
        if not isinstance(size, str) or not size:
            size = DEFAULT_SIZE
        unit_price = self.unit_price(product_id, size)
        qty = parse_quantity(quantity)
        try:
            total = (unit_price * qty).quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise InvalidQuantityError() from None
        return Quote(
            product_id=product_id,
            name=self.name(product_id),
            size=size,
            quantity=qty,
            unit_price=unit_price,
            total=total,
        )
