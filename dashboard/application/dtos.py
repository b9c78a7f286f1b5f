"""
报表应用服务层的数据传输对象。
把报表行中的Decimal和时间转换为JSON友好的值。
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List


def serialize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: serialize_value(value) for key, value in row.items()}


def serialize_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_row(row) for row in rows]


class AnalyticsDTO:
    """后台分析数据"""

    def __init__(
        self,
        sales_trend: List[Dict[str, Any]],
        category_performance: List[Dict[str, Any]],
        top_products: List[Dict[str, Any]],
        customer_growth: List[Dict[str, Any]],
        revenue_growth: float,
        orders_growth: float,
    ):
        self.sales_trend = sales_trend
        self.category_performance = category_performance
        self.top_products = top_products
        self.customer_growth = customer_growth
        self.revenue_growth = revenue_growth
        self.orders_growth = orders_growth

    def to_dict(self) -> Dict[str, Any]:
        return {
            'salesTrend': serialize_rows(self.sales_trend),
            'categoryPerformance': serialize_rows(self.category_performance),
            'topProducts': serialize_rows(self.top_products),
            'customerGrowth': self.customer_growth,
            'revenueGrowth': self.revenue_growth,
            'ordersGrowth': self.orders_growth,
        }
