"""领域实体和值对象规则测试"""
from decimal import Decimal

import pytest

from accounts.domain import CardBrand, CardNumber
from carts.domain import Cart
from core.domain import (
    Money,
    BusinessRuleViolationException,
    EntityNotFoundException,
    InsufficientStockException,
    InvalidEntityStateException,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    ValidationException,
)
from orders.domain import Order, OrderItem, OrderStatus, PricingBreakdown
from products.domain import Product, ProductStatus, Rating, ReviewText


# ==================== 支付卡 ====================

@pytest.mark.parametrize("number, brand", [
    ("4111 1111 1111 1111", CardBrand.VISA),
    ("5500-0000-0000-0004", CardBrand.MASTERCARD),
    ("340000000000009", CardBrand.AMEX),
    ("371449635398431", CardBrand.AMEX),
    ("6011000000000004", CardBrand.UNKNOWN),
])
def test_card_brand_detection(number, brand):
    assert CardNumber(number).brand == brand


def test_card_number_keeps_only_last4_for_display():
    card = CardNumber("4111 1111 1111 1234")

    assert card.last4 == "1234"
    assert str(card) == "**** 1234"
    assert card.fingerprint == CardNumber("4111-1111-1111-1234").fingerprint


@pytest.mark.parametrize("number", ["", "1234", "4111 abcd 1111 1111", "4" * 20])
def test_invalid_card_number_is_rejected(number):
    with pytest.raises(ValidationException):
        CardNumber(number)


# ==================== 评分 ====================

def test_rating_average_rounds_to_one_decimal():
    assert Rating.average([5, 4, 4]) == Decimal("4.3")
    assert Rating.average([5, 4]) == Decimal("4.5")
    assert Rating.average([]) == Decimal("0.0")


@pytest.mark.parametrize("value", [0, 6, 3.5, True])
def test_rating_outside_range_is_rejected(value):
    with pytest.raises(ValidationException):
        Rating(value)


def test_review_text_length_limit():
    assert str(ReviewText("  mantap  ")) == "mantap"
    with pytest.raises(ValidationException):
        ReviewText("x" * 1001)


# ==================== 订单状态 ====================

def placed_order():
    pricing = PricingBreakdown(
        subtotal=Money("100.00"),
        discount=Money("0"),
        shipping_cost=Money("15.00"),
        tax=Money("10.00"),
        total=Money("125.00"),
    )
    items = [OrderItem(product_id="p-1", product_name="Mouse", quantity=1, price_at_time=Money("100.00"))]
    return Order.place(user_id="u-1", items=items, pricing=pricing, payment="card")


def test_new_order_is_paid_and_raises_placed_event():
    order = placed_order()

    assert order.status == OrderStatus.PAID
    assert order.total.amount == Decimal("125.00")
    assert [type(event) for event in order.domain_events] == [OrderPlacedEvent]


def test_order_without_items_is_rejected():
    pricing = PricingBreakdown(Money("0"), Money("0"), Money("0"), Money("0"), Money("0"))
    with pytest.raises(ValidationException):
        Order.place(user_id="u-1", items=[], pricing=pricing)


@pytest.mark.parametrize("status", [
    OrderStatus.PAID,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.CANCELLED,
    OrderStatus.COMPLETED,
])
def test_only_delivered_order_can_be_completed(status):
    order = placed_order()
    order.status = status

    with pytest.raises(InvalidEntityStateException):
        order.complete()


def test_delivered_order_completes():
    order = placed_order()
    order.change_status(OrderStatus.DELIVERED)
    order.complete()

    assert order.is_completed()
    changes = [event for event in order.domain_events if isinstance(event, OrderStatusChangedEvent)]
    assert [(event.old_status, event.new_status) for event in changes] == [
        (OrderStatus.PAID, OrderStatus.DELIVERED),
        (OrderStatus.DELIVERED, OrderStatus.COMPLETED),
    ]


def test_admin_status_change_rejects_unknown_status():
    order = placed_order()

    with pytest.raises(ValidationException):
        order.change_status("lost")
    assert order.status == OrderStatus.PAID


# ==================== 购物车 ====================

def make_product(stock=5, status=ProductStatus.ACTIVE):
    return Product(name="Keyboard", price=Money("49.90"), stock=stock, status=status)


def test_adding_same_product_accumulates_quantity():
    cart = Cart(user_id="u-1")
    product = make_product()

    cart.add_product(product, 2)
    item = cart.add_product(product, 3)

    assert cart.count == 1
    assert item.quantity == 5
    assert item.price_at_time.amount == Decimal("49.90")


def test_accumulated_quantity_cannot_exceed_stock():
    cart = Cart(user_id="u-1")
    product = make_product(stock=4)
    cart.add_product(product, 3)

    with pytest.raises(InsufficientStockException):
        cart.add_product(product, 2)
    assert cart.items[0].quantity == 3


def test_inactive_product_cannot_be_added():
    with pytest.raises(BusinessRuleViolationException):
        Cart(user_id="u-1").add_product(make_product(status=ProductStatus.INACTIVE))


def test_update_quantity_checks_item_and_stock():
    cart = Cart(user_id="u-1")
    item = cart.add_product(make_product(stock=3), 1)

    with pytest.raises(EntityNotFoundException):
        cart.update_quantity("missing", 1)
    with pytest.raises(ValidationException):
        cart.update_quantity(item.id, 0)
    with pytest.raises(InsufficientStockException):
        cart.update_quantity(item.id, 4)

    assert cart.update_quantity(item.id, 3).quantity == 3


def test_remove_products_only_drops_matching_rows():
    cart = Cart(user_id="u-1")
    keyboard = make_product()
    mouse = Product(name="Mouse", price=Money("20"), stock=5)
    cart.add_product(keyboard)
    cart.add_product(mouse)

    assert cart.remove_products([str(mouse.id)]) == 1
    assert [item.product_id for item in cart.items] == [keyboard.id]
