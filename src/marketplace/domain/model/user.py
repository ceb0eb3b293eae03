"""User aggregate.

The marketplace keeps its own user record and links it to the external
identity provider through ``identity_id``.  Handlers resolve the caller's
identity to a ``User`` once, at entry, and compare ``User.id`` against
``Order.user_id`` from then on.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.exceptions import ValidationError


@dataclass
class User:

    id: str
    identity_id: str
    email: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.identity_id or not self.identity_id.strip():
            raise ValidationError("Identity id is required")
        if "@" not in (self.email or ""):
            raise ValidationError(f"Invalid email address: {self.email!r}")
