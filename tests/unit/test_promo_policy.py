"""促销码规则测试"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from core.domain import Money, BusinessRuleViolationException
from orders.domain import DiscountType, PromoCode, PromoPolicy


@pytest.fixture
def policy():
    return PromoPolicy()


@pytest.fixture
def now():
    return timezone.now()


def promo(**overrides):
    values = {
        'code': "hemat10",
        'discount_type': DiscountType.PERCENTAGE,
        'discount_value': Decimal("10"),
    }
    values.update(overrides)
    return PromoCode(**values)


def test_code_is_stored_uppercase():
    assert promo().code == "HEMAT10"


def test_percentage_discount(policy, now):
    discount = policy.apply(promo(), Money("250.00"), already_redeemed=False, now=now)

    assert discount.amount == Decimal("25.00")


def test_percentage_discount_is_capped_by_max_discount(policy, now):
    discount = policy.apply(promo(max_discount=Decimal("20")), Money("250.00"), False, now)

    assert discount.amount == Decimal("20.00")


def test_fixed_discount_never_exceeds_subtotal(policy, now):
    fixed = promo(discount_type=DiscountType.FIXED, discount_value=Decimal("80"))

    assert policy.apply(fixed, Money("50.00"), False, now).amount == Decimal("50.00")
    assert policy.apply(fixed, Money("120.00"), False, now).amount == Decimal("80.00")


@pytest.mark.parametrize("overrides, subtotal, redeemed, rule", [
    ({'is_active': False}, "100", False, "promo_inactive"),
    ({'start_at': timezone.now() + timedelta(days=1)}, "100", False, "promo_not_started"),
    ({'expires_at': timezone.now() - timedelta(days=1)}, "100", False, "promo_expired"),
    ({'min_order_amount': Decimal("150")}, "100", False, "promo_min_order"),
    ({'usage_limit': 5, 'used_count': 5}, "100", False, "promo_usage_limit"),
    ({}, "100", True, "promo_already_redeemed"),
])
def test_each_rule_is_enforced(policy, now, overrides, subtotal, redeemed, rule):
    with pytest.raises(BusinessRuleViolationException) as exc_info:
        policy.validate(promo(**overrides), Money(subtotal), redeemed, now)

    assert exc_info.value.rule_name == rule


def test_first_failing_rule_wins(policy, now):
    expired_and_too_small = promo(
        expires_at=now - timedelta(days=1),
        min_order_amount=Decimal("1000"),
    )

    with pytest.raises(BusinessRuleViolationException) as exc_info:
        policy.validate(expired_and_too_small, Money("10"), True, now)

    assert exc_info.value.rule_name == "promo_expired"


def test_min_order_message_contains_amount(policy, now):
    with pytest.raises(BusinessRuleViolationException) as exc_info:
        policy.validate(promo(min_order_amount=Decimal("150")), Money("100"), False, now)

    assert "150.00" in str(exc_info.value)


def test_zero_usage_limit_means_unlimited(policy, now):
    policy.validate(promo(usage_limit=0, used_count=99), Money("100"), False, now)
