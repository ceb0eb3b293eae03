"""Application service: Place Order use case.

The only place that coordinates SKU stock and Order creation on the way
in.  Every SKU is checked and deducted before anything is saved, and the
deducted SKUs and the new order are committed in one unit of work.

A repeated submission carrying the same idempotency key returns the order
created by the first one and touches no stock.
"""

from __future__ import annotations

import structlog

from marketplace.application.dto import (
    OrderDetailDTO,
    OrderItemSpec,
    ShippingAddressDTO,
    order_detail_from,
)
from marketplace.application.ownership import resolve_user
from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, EntityNotFoundError
from marketplace.domain.model.order import (
    DEFAULT_DELIVERY_METHOD,
    DEFAULT_PAYMENT_METHOD,
    Order,
    OrderItem,
)
from marketplace.domain.model.sku import Sku
from marketplace.domain.model.value_objects import Money, Quantity
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        identity_id: str,
        item_specs: list[OrderItemSpec],
        shipping_cost: str = "0",
        discount_amount: str = "0",
        promo_code: str | None = None,
        shipping_address: ShippingAddressDTO | None = None,
        delivery_method: str = DEFAULT_DELIVERY_METHOD,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
        customer_notes: str | None = None,
        idempotency_key: str | None = None,
    ) -> ServiceResponse[OrderDetailDTO]:
        """Place a new order.

        Steps:
        1. Resolve the caller to a marketplace user.
        2. Return the earlier order if this idempotency key was seen before.
        3. Load each SKU and deduct the ordered quantity (fail if short).
        4. Build OrderItems with *current* SKU prices (snapshot).
        5. Let the Order aggregate validate the rest, persist, commit.
        """
        log = logger.bind(identity_id=identity_id)
        log.info("Placing order", lines=len(item_specs))
        key = idempotency_key.strip() if idempotency_key else None

        try:
            with self._uow as uow:
                user = resolve_user(uow.users, identity_id)

                existing = (
                    uow.orders.get_by_idempotency_key(user.id, key) if key else None
                )
                if existing is not None:
                    log.info(
                        "Order already exists for idempotency key",
                        idempotency_key=key,
                        order_id=existing.id,
                    )
                    return ServiceResponse.ok(
                        "Order already exists", order_detail_from(existing)
                    )

                touched: dict[str, Sku] = {}
                line_items: list[OrderItem] = []
                for spec in item_specs:
                    sku = touched.get(spec.sku_id) or uow.skus.get_by_id(spec.sku_id)
                    if sku is None:
                        log.warning("SKU not found", sku_id=spec.sku_id)
                        raise EntityNotFoundError(f"SKU '{spec.sku_id}' not found")

                    quantity = Quantity(spec.quantity)
                    sku.deduct_stock(quantity.value)
                    touched[sku.id] = sku

                    line_items.append(
                        OrderItem(
                            sku_id=sku.id,
                            sku_code=sku.sku_code,
                            product_name=sku.product_name,
                            quantity=quantity,
                            unit_price=sku.price,  # <-- price snapshot
                        )
                    )

                currency = line_items[0].unit_price.currency if line_items else "USD"
                order = Order.place(
                    user_id=user.id,
                    items=line_items,
                    shipping_cost=Money.of(shipping_cost, currency),
                    discount_amount=Money.of(discount_amount, currency),
                    promo_code=promo_code,
                    shipping_address=(
                        shipping_address.to_domain() if shipping_address else None
                    ),
                    delivery_method=delivery_method,
                    payment_method=payment_method,
                    customer_notes=customer_notes,
                    idempotency_key=key,
                )

                for sku in touched.values():
                    uow.skus.save(sku)
                uow.orders.save(order)
                uow.commit()
        except DomainException as exc:
            log.warning("Order rejected", reason=str(exc))
            return ServiceResponse.from_exception(exc)
        except Exception:
            log.exception("Error placing order")
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while placing order"
            )

        log.info("Order placed", order_id=order.id, order_number=order.order_number)
        return ServiceResponse.ok("Order placed successfully", order_detail_from(order))
