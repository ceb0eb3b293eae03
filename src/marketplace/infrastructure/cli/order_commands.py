"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from marketplace.application.cancel_order import CancelOrderHandler
from marketplace.application.dto import OrderItemSpec, ShippingAddressDTO
from marketplace.application.get_order import GetOrderHandler
from marketplace.application.list_orders import ListUserOrdersHandler
from marketplace.application.order_history import GetOrderStatusHistoryHandler
from marketplace.application.place_order import PlaceOrderHandler
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.application.update_payment_status import UpdatePaymentStatusHandler
from marketplace.domain.model.order import DEFAULT_DELIVERY_METHOD, DEFAULT_PAYMENT_METHOD
from marketplace.domain.model.order_status import OrderStatus, PaymentStatus
from marketplace.infrastructure.bootstrap import (
    order_repository,
    unit_of_work,
    user_repository,
)
from marketplace.infrastructure.cli.output import emit, format_money, json_option
from marketplace.infrastructure.config import Settings

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)
_PAYMENT_CHOICE = click.Choice([s.value for s in PaymentStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'SKU_ID:Qty,SKU_ID:Qty' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'SkuId:Quantity'."
            )
        sku_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for SKU '{sku_id}'."
            ) from None
        specs.append(OrderItemSpec(sku_id=sku_id.strip(), quantity=qty))
    return specs


def _parse_address(raw: str | None) -> ShippingAddressDTO | None:
    """Parse a JSON object with the ShippingAddressDTO field names."""
    if raw is None:
        return None
    try:
        fields = json.loads(raw)
        return ShippingAddressDTO(**fields)
    except (json.JSONDecodeError, TypeError) as exc:
        raise click.BadParameter(f"Invalid address: {exc}", param_hint="--address") from None


def _display_order(dto) -> None:
    """Shared formatting for displaying an order."""

    def money(amount: str) -> str:
        return format_money(amount, dto.currency)

    click.echo(f"Order {dto.order_number}  (status={dto.status.display_name})")
    click.echo(f"ID:       {dto.order_id}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo(f"Payment:  {dto.payment_status.display_name} ({dto.payment_method})")
    click.echo(f"Delivery: {dto.delivery_method}")
    if dto.shipping_address:
        address = dto.shipping_address.to_domain()
        click.echo(f"Ship to:  {address.full_name}, {address.formatted()}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number} ({dto.shipping_carrier})")
    if dto.customer_notes:
        click.echo(f"Notes:    {dto.customer_notes}")
    if dto.cancellation_reason:
        click.echo(f"Reason:   {dto.cancellation_reason}")
    click.echo()
    click.echo(f"  {'Product':<20} {'SKU':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.sku_code:<10} {item.quantity:>5} "
            f"{money(item.unit_price):>10} {money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<27} {money(dto.subtotal):>31}")
    click.echo(f"  {'Shipping':<27} {money(dto.shipping_cost):>31}")
    click.echo(f"  {'Discount':<27} {money(dto.discount_amount):>31}")
    click.echo(f"  {'Order Total':<27} {money(dto.total):>31}")


@click.command("place")
@click.option("--user", "identity_id", required=True, help="Caller identity id.")
@click.option("--items", required=True, help="Items as 'SkuId:Qty,SkuId:Qty'.")
@click.option("--shipping", default="0", show_default=True, help="Shipping cost.")
@click.option("--discount", default="0", show_default=True, help="Discount amount.")
@click.option("--promo", default=None, help="Promo code.")
@click.option(
    "--address", default=None,
    help='Shipping address as JSON, e.g. \'{"first_name": "Ada", ...}\'.',
)
@click.option("--delivery", default=DEFAULT_DELIVERY_METHOD, show_default=True,
              help="Delivery method.")
@click.option("--payment-method", default=DEFAULT_PAYMENT_METHOD, show_default=True,
              help="Payment method.")
@click.option("--notes", default=None, help="Notes for the seller.")
@click.option("--idempotency-key", default=None,
              help="Repeat-safe key; resubmitting it returns the first order.")
@json_option
@click.pass_obj
def order_place(
    settings: Settings,
    identity_id: str,
    items: str,
    shipping: str,
    discount: str,
    promo: str | None,
    address: str | None,
    delivery: str,
    payment_method: str,
    notes: str | None,
    idempotency_key: str | None,
    as_json: bool,
) -> None:
    """Place a new order (deducts stock)."""
    specs = _parse_items(items)
    handler = PlaceOrderHandler(unit_of_work(settings))
    response = handler.handle(
        identity_id,
        specs,
        shipping_cost=shipping,
        discount_amount=discount,
        promo_code=promo,
        shipping_address=_parse_address(address),
        delivery_method=delivery,
        payment_method=payment_method,
        customer_notes=notes,
        idempotency_key=idempotency_key,
    )
    emit(response, as_json, _display_order)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--user", "identity_id", required=True, help="Caller identity id.")
@json_option
@click.pass_obj
def order_show(settings: Settings, order_id: str, identity_id: str, as_json: bool) -> None:
    """Show details of one of your orders."""
    handler = GetOrderHandler(order_repository(settings), user_repository(settings))
    emit(handler.handle(order_id, identity_id), as_json, _display_order)


@click.command("list")
@click.option("--user", "identity_id", required=True, help="Caller identity id.")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Filter by status.")
@click.option("--page", "page_number", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=None, help="Orders per page.")
@json_option
@click.pass_obj
def order_list(
    settings: Settings,
    identity_id: str,
    status: str | None,
    page_number: int,
    page_size: int | None,
    as_json: bool,
) -> None:
    """List your orders, newest first."""
    handler = ListUserOrdersHandler(
        order_repository(settings),
        user_repository(settings),
        default_page_size=settings.page_size,
    )
    response = handler.handle(
        identity_id,
        status=OrderStatus(status.upper()) if status else None,
        page_number=page_number,
        page_size=page_size,
    )

    def render(page) -> None:
        if not page.orders:
            click.echo("No orders found.")
            return
        click.echo(f"{'Order':<20} {'Status':<12} {'Items':>6} {'Total':>10}")
        click.echo("-" * 51)
        for o in page.orders:
            click.echo(
                f"{o.order_number:<20} {o.status.display_name:<12} "
                f"{o.total_items:>6} {format_money(o.total, o.currency):>10}"
            )
        click.echo(f"Page {page.page_number}/{page.total_pages} ({page.total_count} orders)")

    emit(response, as_json, render)


@click.command("history")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--user", "identity_id", required=True, help="Caller identity id.")
@json_option
@click.pass_obj
def order_history(settings: Settings, order_id: str, identity_id: str, as_json: bool) -> None:
    """Show the status timeline of one of your orders."""
    handler = GetOrderStatusHistoryHandler(
        order_repository(settings), user_repository(settings)
    )

    def render(result) -> None:
        click.echo(f"Order {result.order_number}")
        for entry in result.history:
            marker = "*" if entry.is_current else " "
            click.echo(
                f" {marker} {entry.timestamp:%Y-%m-%d %H:%M}  "
                f"{entry.status.display_name:<11} {entry.description}"
            )

    emit(handler.handle(order_id, identity_id), as_json, render)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--user", "identity_id", required=True, help="Caller identity id.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
@json_option
@click.pass_obj
def order_cancel(
    settings: Settings,
    order_id: str,
    identity_id: str,
    reason: str | None,
    as_json: bool,
) -> None:
    """Cancel one of your orders (restores stock)."""
    handler = CancelOrderHandler(unit_of_work(settings))
    emit(handler.handle(order_id, identity_id, reason), as_json)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICE,
              help="Target status. CANCELLED is refused; use 'order cancel'.")
@click.option("--tracking", default=None, help="Tracking number (when shipping).")
@click.option("--carrier", default=None, help="Carrier (when shipping).")
@json_option
@click.pass_obj
def order_status(
    settings: Settings,
    order_id: str,
    new_status: str,
    tracking: str | None,
    carrier: str | None,
    as_json: bool,
) -> None:
    """Advance an order's status (admin).

    Cancellation is not done here: 'order cancel' restores stock.
    """
    handler = UpdateOrderStatusHandler(unit_of_work(settings))
    response = handler.handle(
        order_id, OrderStatus(new_status.upper()), tracking_number=tracking, carrier=carrier
    )

    def render(dto) -> None:
        click.echo(f"Order {dto.order_number} is now {dto.status.display_name}.")
        if dto.tracking_number:
            click.echo(f"Tracking: {dto.tracking_number} ({dto.shipping_carrier})")

    emit(response, as_json, render)


@click.command("payment")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_PAYMENT_CHOICE,
              help="Payment status reported by the provider.")
@json_option
@click.pass_obj
def order_payment(settings: Settings, order_id: str, new_status: str, as_json: bool) -> None:
    """Record a payment status change (admin)."""
    handler = UpdatePaymentStatusHandler(unit_of_work(settings))
    response = handler.handle(order_id, PaymentStatus(new_status.upper()))

    def render(dto) -> None:
        click.echo(
            f"Payment for order {dto.order_number} is now "
            f"{dto.payment_status.display_name}."
        )

    emit(response, as_json, render)
