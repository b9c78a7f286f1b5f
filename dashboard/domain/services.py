"""
报表领域服务。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Sequence

from django.utils import timezone


def growth_percent(previous: Any, current: Any) -> float:
    """
    计算环比增长百分比，保留一位小数。

    Args:
        previous: 上一周期的值
        current: 当前周期的值

    Returns:
        增长百分比，上一周期为0时返回100
    """
    previous = Decimal(str(previous or 0))
    current = Decimal(str(current or 0))
    if previous == 0:
        return 100.0
    change = (current - previous) / previous * Decimal(100)
    return float(change.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def trend_growth(trend: Sequence[Dict[str, Any]], key: str) -> float:
    """最后两个周期之间的增长百分比，不足两个周期时为0"""
    if len(trend) < 2:
        return 0.0
    return growth_percent(trend[-2][key], trend[-1][key])


def customer_growth(customers: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    按客户最后下单月份统计客户数和回头客数。
    月份按本地时区（TIME_ZONE）划分，与销售趋势一致。

    Args:
        customers: 客户报表行，需要 last_order_date 和 total_orders

    Returns:
        按月份升序的 {month, newCustomers, returning} 列表
    """
    months: Dict[str, Dict[str, Any]] = {}
    for customer in customers:
        last_order = customer['last_order_date']
        if not last_order:
            continue
        if timezone.is_aware(last_order):
            last_order = timezone.localtime(last_order)
        month = last_order.strftime("%Y-%m")
        row = months.setdefault(month, {'month': month, 'newCustomers': 0, 'returning': 0})
        row['newCustomers'] += 1
        if customer['total_orders'] > 1:
            row['returning'] += 1
    return [months[month] for month in sorted(months)]
