"""结算计价规则测试"""
from decimal import Decimal

import pytest

from core.domain import Money
from orders.domain import CheckoutPricing, PriceLine


@pytest.fixture
def pricing():
    return CheckoutPricing(
        free_shipping_threshold=Decimal("500"),
        shipping_cost=Decimal("15"),
        tax_rate=Decimal("0.10"),
    )


def line(price, quantity):
    return PriceLine("product", Money(price), quantity)


def test_order_below_threshold_pays_shipping_and_tax(pricing):
    breakdown = pricing.calculate([line("100.00", 2)])

    assert breakdown.subtotal.amount == Decimal("200.00")
    assert breakdown.shipping_cost.amount == Decimal("15.00")
    assert breakdown.tax.amount == Decimal("20.00")
    assert breakdown.total.amount == Decimal("235.00")


def test_order_above_threshold_ships_free(pricing):
    breakdown = pricing.calculate([line("250.50", 2)])

    assert breakdown.subtotal.amount == Decimal("501.00")
    assert breakdown.shipping_cost.amount == Decimal("0")
    assert breakdown.tax.amount == Decimal("50.10")
    assert breakdown.total.amount == Decimal("551.10")


def test_order_exactly_at_threshold_still_pays_shipping(pricing):
    breakdown = pricing.calculate([line("500.00", 1)])

    assert breakdown.shipping_cost.amount == Decimal("15.00")


def test_shipping_depends_on_subtotal_before_discount(pricing):
    breakdown = pricing.calculate([line("600.00", 1)], discount=Money("200.00"))

    assert breakdown.shipping_cost.amount == Decimal("0")
    assert breakdown.tax.amount == Decimal("40.00")
    assert breakdown.total.amount == Decimal("440.00")


def test_discount_reduces_taxable_amount(pricing):
    breakdown = pricing.calculate([line("100.00", 2)], discount=Money("50.00"))

    assert breakdown.discount.amount == Decimal("50.00")
    assert breakdown.tax.amount == Decimal("15.00")
    assert breakdown.total.amount == Decimal("180.00")


def test_discount_above_subtotal_leaves_only_shipping(pricing):
    breakdown = pricing.calculate([line("100.00", 2)], discount=Money("300.00"))

    assert breakdown.tax.amount == Decimal("0")
    assert breakdown.total.amount == Decimal("15.00")


def test_tax_is_rounded_half_up_to_cents(pricing):
    breakdown = pricing.calculate([line("0.05", 1)])

    assert breakdown.tax.amount == Decimal("0.01")


def test_breakdown_serializes_amounts_as_strings(pricing):
    data = pricing.calculate([line("19.99", 3)]).to_dict()

    assert data == {
        'subtotal': "59.97",
        'discount': "0.00",
        'shippingCost': "15.00",
        'tax': "6.00",
        'total': "80.97",
    }
