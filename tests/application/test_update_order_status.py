"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from marketplace.application.response import ErrorKind
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.model.order_status import OrderStatus, PaymentStatus
from tests.fakes import ExplodingOrderRepository, FakeUnitOfWork, advance, make_order


@pytest.fixture
def processing_order(uow):
    order = advance(make_order(), OrderStatus.CONFIRMED, OrderStatus.PROCESSING)
    uow.orders.save(order)
    return order


class TestUpdateOrderStatusHappyPath:

    def test_ship_with_tracking(self, uow, processing_order):
        response = UpdateOrderStatusHandler(uow).handle(
            processing_order.id, OrderStatus.SHIPPED, tracking_number="1Z999", carrier="UPS"
        )

        assert response.success
        dto = response.data
        assert dto.status == OrderStatus.SHIPPED
        assert dto.payment_status == PaymentStatus.PENDING
        assert dto.order_number == processing_order.order_number
        assert dto.shipped_at is not None
        assert dto.tracking_number == "1Z999"
        assert dto.shipping_carrier == "UPS"

        stored = uow.orders.get_by_id(processing_order.id)
        assert stored.tracking_number == "1Z999"
        assert stored.shipped_at is not None

    def test_ship_without_tracking(self, uow, processing_order):
        response = UpdateOrderStatusHandler(uow).handle(
            processing_order.id, OrderStatus.SHIPPED
        )

        assert response.success
        assert response.data.shipped_at is not None
        assert response.data.tracking_number is None
        assert response.data.shipping_carrier is None

    def test_ship_with_only_tracking_number_ignores_it(self, uow, processing_order):
        response = UpdateOrderStatusHandler(uow).handle(
            processing_order.id, OrderStatus.SHIPPED, tracking_number="1Z999", carrier="  "
        )
        assert response.data.tracking_number is None

    def test_deliver_keeps_existing_tracking(self, uow, processing_order):
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(processing_order.id, OrderStatus.SHIPPED, "1Z999", "UPS")

        response = handler.handle(processing_order.id, OrderStatus.DELIVERED)

        assert response.data.status == OrderStatus.DELIVERED
        assert response.data.delivered_at is not None
        assert response.data.tracking_number == "1Z999"

    def test_tracking_ignored_when_not_shipping(self, uow):
        order = make_order()
        uow.orders.save(order)

        response = UpdateOrderStatusHandler(uow).handle(
            order.id, OrderStatus.CONFIRMED, tracking_number="1Z999", carrier="UPS"
        )

        assert response.data.status == OrderStatus.CONFIRMED
        assert response.data.tracking_number is None


class TestUpdateOrderStatusRejections:

    def test_unknown_order(self, uow):
        response = UpdateOrderStatusHandler(uow).handle("nope", OrderStatus.CONFIRMED)
        assert response.error == ErrorKind.NOT_FOUND
        assert response.data is None

    def test_confirmed_to_delivered_rejected(self, uow):
        order = advance(make_order(), OrderStatus.CONFIRMED)
        uow.orders.save(order)

        response = UpdateOrderStatusHandler(uow).handle(order.id, OrderStatus.DELIVERED)

        assert response.error == ErrorKind.INVALID_TRANSITION
        assert response.message == "Cannot transition from Confirmed to Delivered"
        stored = uow.orders.get_by_id(order.id)
        assert stored.status == OrderStatus.CONFIRMED
        assert stored.delivered_at is None
        assert stored.updated_at == order.updated_at

    def test_terminal_order_rejected(self, uow):
        order = make_order()
        order.cancel()
        uow.orders.save(order)

        response = UpdateOrderStatusHandler(uow).handle(order.id, OrderStatus.CONFIRMED)

        assert response.error == ErrorKind.INVALID_TRANSITION
        assert response.message == "Cannot transition from Cancelled to Confirmed"

    def test_cancellation_is_left_to_cancel_order(self, uow):
        order = advance(make_order(), OrderStatus.CONFIRMED)
        uow.orders.save(order)

        response = UpdateOrderStatusHandler(uow).handle(order.id, OrderStatus.CANCELLED)

        assert response.error == ErrorKind.INVALID_TRANSITION
        assert "order cancellation" in response.message
        stored = uow.orders.get_by_id(order.id)
        assert stored.status == OrderStatus.CONFIRMED
        assert stored.cancelled_at is None


class TestUpdateOrderStatusStorageFailure:

    def test_failed_write_reports_unexpected_and_keeps_status(self):
        order = make_order()
        orders = ExplodingOrderRepository([order])
        uow = FakeUnitOfWork(orders=orders)

        response = UpdateOrderStatusHandler(uow).handle(order.id, OrderStatus.CONFIRMED)

        assert response.error == ErrorKind.UNEXPECTED
        assert response.message == "An error occurred while updating order status"
        assert response.data is None
        assert uow.rolled_back
        assert orders.get_by_id(order.id).status == OrderStatus.PENDING
