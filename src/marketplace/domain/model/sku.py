"""Sku aggregate: a purchasable product variant with its own stock.

Orders reference SKUs by id only.  Placement deducts stock, cancellation
restores it; both paths go through the methods below.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.value_objects import Money


@dataclass
class Sku:
    """Aggregate root for stock tracking.

    Invariant: ``stock_quantity`` is never negative.
    """

    id: str
    sku_code: str
    product_name: str
    price: Money
    stock_quantity: int = 0

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

    def deduct_stock(self, quantity: int) -> None:
        """Take stock for a newly placed order.

        Raises ValidationError if there is not enough on hand.
        """
        if quantity <= 0:
            raise ValidationError("Deduct quantity must be positive")
        if quantity > self.stock_quantity:
            raise ValidationError(
                f"Insufficient stock for {self.product_name} ({self.sku_code}) "
                f"(need {quantity}, have {self.stock_quantity})"
            )
        self.stock_quantity -= quantity

    def restore_stock(self, quantity: int) -> None:
        """Put stock back, e.g. when an order is cancelled."""
        if quantity <= 0:
            raise ValidationError("Restore quantity must be positive")
        self.stock_quantity += quantity

    def update_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.stock_quantity = quantity
