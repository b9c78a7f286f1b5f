"""报表增长率和客户增长统计测试"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from dashboard.domain import customer_growth, growth_percent, trend_growth


def test_growth_percent_is_rounded_to_one_decimal():
    assert growth_percent(Decimal("300"), Decimal("400")) == 33.3
    assert growth_percent(200, 100) == -50.0
    assert growth_percent(3, 5) == 66.7


def test_growth_from_zero_is_one_hundred_percent():
    assert growth_percent(0, 250) == 100.0
    assert growth_percent(None, 0) == 100.0


def test_trend_growth_compares_last_two_periods():
    trend = [
        {'period': "2026-01", 'revenue': Decimal("100.00"), 'orders': 2},
        {'period': "2026-02", 'revenue': Decimal("80.00"), 'orders': 4},
        {'period': "2026-03", 'revenue': Decimal("120.00"), 'orders': 3},
    ]

    assert trend_growth(trend, 'revenue') == 50.0
    assert trend_growth(trend, 'orders') == -25.0


def test_trend_growth_needs_two_periods():
    assert trend_growth([], 'revenue') == 0.0
    assert trend_growth([{'revenue': Decimal("10")}], 'revenue') == 0.0


def test_customer_growth_groups_by_last_order_month():
    customers = [
        {'last_order_date': datetime(2026, 3, 2), 'total_orders': 1},
        {'last_order_date': datetime(2026, 1, 15), 'total_orders': 3},
        {'last_order_date': datetime(2026, 3, 20), 'total_orders': 2},
        {'last_order_date': None, 'total_orders': 0},
    ]

    assert customer_growth(customers) == [
        {'month': "2026-01", 'newCustomers': 1, 'returning': 1},
        {'month': "2026-03", 'newCustomers': 2, 'returning': 1},
    ]


def test_customer_growth_uses_local_month():
    # 2024-02-01 03:00 Asia/Jakarta
    customers = [{'last_order_date': datetime(2024, 1, 31, 20, 0, tzinfo=dt_timezone.utc), 'total_orders': 1}]

    assert customer_growth(customers) == [{'month': "2024-02", 'newCustomers': 1, 'returning': 0}]
