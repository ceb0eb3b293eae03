"""Integration tests for the PlaceOrder use case."""

import dataclasses

from marketplace.application.dto import OrderItemSpec, ShippingAddressDTO
from marketplace.application.place_order import PlaceOrderHandler
from marketplace.application.response import ErrorKind
from marketplace.domain.model.order_status import OrderStatus
from marketplace.domain.model.value_objects import Money
from tests.fakes import (
    ALICE,
    BOB,
    ExplodingOrderRepository,
    FakeSkuRepository,
    FakeUnitOfWork,
    FakeUserRepository,
    make_skus,
)

ADDRESS = ShippingAddressDTO(
    first_name="Ada",
    last_name="Lovelace",
    phone_number="+1 555 0100",
    email="ada@example.com",
    address_line1="1 Main St",
    city="Springfield",
    postal_code="62701",
    country="US",
)


class TestPlaceOrderHappyPath:

    def test_place_deducts_stock_and_snapshots_prices(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice",
            [OrderItemSpec("A", 3), OrderItemSpec("B", 1)],
            shipping_cost="5.00",
            discount_amount="10.00",
            promo_code="WELCOME10",
        )

        assert response.success
        dto = response.data
        assert dto.status == OrderStatus.PENDING
        assert dto.subtotal == "70.00"
        assert dto.total == "65.00"
        assert dto.currency == "USD"
        assert dto.promo_code == "WELCOME10"
        assert [i.unit_price for i in dto.items] == ["15.00", "25.00"]
        assert uow.skus.get_by_id("A").stock_quantity == 7
        assert uow.skus.get_by_id("B").stock_quantity == 4

        stored = uow.orders.get_by_id(dto.order_id)
        assert stored.user_id == "u-alice"
        assert uow.committed

    def test_repeated_sku_lines_accumulate(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 4), OrderItemSpec("A", 6)]
        )
        assert response.success
        assert uow.skus.get_by_id("A").stock_quantity == 0

    def test_price_change_after_placement_does_not_affect_order(self, uow):
        dto = PlaceOrderHandler(uow).handle("alice", [OrderItemSpec("A", 1)]).data

        sku = uow.skus.get_by_id("A")
        sku.price = Money.of("99.00")
        uow.skus.save(sku)

        stored = uow.orders.get_by_id(dto.order_id)
        assert stored.items[0].unit_price == Money.of("15.00")


class TestPlaceOrderRejections:

    def test_insufficient_stock_leaves_everything_untouched(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 2), OrderItemSpec("B", 6)]
        )

        assert response.error == ErrorKind.VALIDATION
        assert "Insufficient stock for Gadget" in response.message
        assert uow.skus.get_by_id("A").stock_quantity == 10
        assert uow.skus.get_by_id("B").stock_quantity == 5
        assert uow.orders.list_by_user("u-alice") == []

    def test_unknown_sku(self, uow):
        response = PlaceOrderHandler(uow).handle("alice", [OrderItemSpec("Z", 1)])
        assert response.error == ErrorKind.NOT_FOUND
        assert response.message == "SKU 'Z' not found"

    def test_unknown_user(self, uow):
        response = PlaceOrderHandler(uow).handle("mallory", [OrderItemSpec("A", 1)])
        assert response.error == ErrorKind.NOT_FOUND

    def test_zero_quantity(self, uow):
        response = PlaceOrderHandler(uow).handle("alice", [OrderItemSpec("A", 0)])
        assert response.error == ErrorKind.VALIDATION

    def test_empty_order(self, uow):
        response = PlaceOrderHandler(uow).handle("alice", [])
        assert response.error == ErrorKind.VALIDATION
        assert "at least one item" in response.message

    def test_invalid_shipping_cost(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 1)], shipping_cost="-1"
        )
        assert response.error == ErrorKind.VALIDATION
        assert uow.skus.get_by_id("A").stock_quantity == 10


class TestPlaceOrderCheckoutDetails:

    def test_address_methods_and_notes_are_kept(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice",
            [OrderItemSpec("A", 1)],
            shipping_address=ADDRESS,
            delivery_method="express",
            payment_method="paypal",
            customer_notes="  Leave at the door ",
        )

        dto = response.data
        assert dto.shipping_address == ADDRESS
        assert dto.delivery_method == "express"
        assert dto.payment_method == "paypal"
        assert dto.customer_notes == "Leave at the door"

        stored = uow.orders.get_by_id(dto.order_id)
        assert stored.shipping_address.formatted() == "1 Main St, Springfield, 62701, US"

    def test_defaults_without_address(self, uow):
        dto = PlaceOrderHandler(uow).handle("alice", [OrderItemSpec("A", 1)]).data
        assert dto.shipping_address is None
        assert dto.delivery_method == "standard"
        assert dto.payment_method == "card"
        assert dto.customer_notes is None

    def test_incomplete_address_rejected_before_stock_moves(self, uow):
        address = dataclasses.replace(ADDRESS, city=" ")

        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 2)], shipping_address=address
        )

        assert response.error == ErrorKind.VALIDATION
        assert response.message == "City is required"
        assert uow.skus.get_by_id("A").stock_quantity == 10

    def test_blank_payment_method_rejected(self, uow):
        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 1)], payment_method=" "
        )
        assert response.error == ErrorKind.VALIDATION
        assert response.message == "Payment method is required"


class TestPlaceOrderIdempotency:

    def test_repeated_key_returns_first_order(self, uow):
        handler = PlaceOrderHandler(uow)
        first = handler.handle("alice", [OrderItemSpec("A", 2)], idempotency_key="cart-1")

        second = handler.handle("alice", [OrderItemSpec("A", 2)], idempotency_key="cart-1")

        assert second.success
        assert second.message == "Order already exists"
        assert second.data.order_id == first.data.order_id
        assert uow.skus.get_by_id("A").stock_quantity == 8
        assert len(uow.orders.list_by_user("u-alice")) == 1

    def test_key_is_scoped_to_the_user(self, uow):
        handler = PlaceOrderHandler(uow)
        alice = handler.handle("alice", [OrderItemSpec("A", 1)], idempotency_key="cart-1")

        bob = handler.handle("bob", [OrderItemSpec("A", 1)], idempotency_key="cart-1")

        assert bob.message == "Order placed successfully"
        assert bob.data.order_id != alice.data.order_id
        assert uow.skus.get_by_id("A").stock_quantity == 8

    def test_blank_key_is_ignored(self, uow):
        handler = PlaceOrderHandler(uow)
        handler.handle("alice", [OrderItemSpec("A", 1)], idempotency_key=" ")
        handler.handle("alice", [OrderItemSpec("A", 1)], idempotency_key=" ")

        assert len(uow.orders.list_by_user("u-alice")) == 2


class TestPlaceOrderStorageFailure:

    def test_failed_order_write_restores_deducted_stock(self):
        skus = FakeSkuRepository(make_skus())
        uow = FakeUnitOfWork(
            orders=ExplodingOrderRepository(),
            skus=skus,
            users=FakeUserRepository([ALICE, BOB]),
        )

        response = PlaceOrderHandler(uow).handle(
            "alice", [OrderItemSpec("A", 3), OrderItemSpec("B", 1)]
        )

        assert response.error == ErrorKind.UNEXPECTED
        assert response.message == "An error occurred while placing order"
        assert response.data is None
        assert uow.rolled_back
        assert not uow.committed
        assert skus.get_by_id("A").stock_quantity == 10
        assert skus.get_by_id("B").stock_quantity == 5
        assert uow.orders.list_by_user("u-alice") == []
