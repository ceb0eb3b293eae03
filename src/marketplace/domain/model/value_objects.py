"""Value objects: prices, quantities and the delivery address.

All three are frozen dataclasses validated in ``__post_init__``, so an
instance that exists is always valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from marketplace.domain.exceptions import ValidationError

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative amount in one currency, always held to the cent.

    Order totals only ever add line totals and clamp a discount, so the
    arithmetic surface is addition, integer multiplication and
    ``subtract_floor_zero``.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ValidationError(f"Invalid currency code: {self.currency!r}")
        object.__setattr__(self, "amount", self.amount.quantize(_CENT, ROUND_HALF_UP))
        object.__setattr__(self, "currency", self.currency.upper())

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Parse user or file input; bad input is a ValidationError."""
        try:
            return Money(Decimal(str(amount).strip()), currency)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)

    def __add__(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def subtract_floor_zero(self, other: Money) -> Money:
        """``self - other``, or zero when ``other`` is larger."""
        self._same_currency(other)
        return Money(max(self.amount - other.amount, Decimal("0")), self.currency)

    def _same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")


@dataclass(frozen=True)
class Quantity:
    """Number of units on an order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")


_REQUIRED_ADDRESS_FIELDS = (
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("phone_number", "Phone number"),
    ("email", "Email"),
    ("address_line1", "Address line 1"),
    ("city", "City"),
    ("postal_code", "Postal code"),
    ("country", "Country"),
)


@dataclass(frozen=True)
class ShippingAddress:
    """Where an order is delivered.  Text fields are stored stripped."""

    first_name: str
    last_name: str
    phone_number: str
    email: str
    address_line1: str
    city: str
    postal_code: str
    country: str
    address_line2: str | None = None
    state: str | None = None

    def __post_init__(self) -> None:
        for name, label in _REQUIRED_ADDRESS_FIELDS:
            value = getattr(self, name)
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
            object.__setattr__(self, name, value.strip())
        for name in ("address_line2", "state"):
            value = getattr(self, name)
            object.__setattr__(self, name, (value.strip() or None) if value else None)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def formatted(self) -> str:
        """One-line address, e.g. ``1 Main St, Springfield, IL 62701, US``."""
        parts = [self.address_line1]
        if self.address_line2:
            parts.append(self.address_line2)
        parts.append(" ".join(p for p in (f"{self.city},", self.state, self.postal_code) if p))
        parts.append(self.country)
        return ", ".join(parts)
