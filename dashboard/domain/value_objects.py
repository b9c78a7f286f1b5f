"""
报表领域模型中的值对象。
"""
from datetime import datetime
from typing import Optional

from core.domain import ValueObject


class Granularity:
    """销售趋势的时间粒度"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    ALL = (DAY, WEEK, MONTH)


UNCATEGORIZED = "Uncategorized"


class ReportFilter(ValueObject):
    """
    报表过滤条件。
    起止时间都包含在内，作用于订单的下单时间。
    """

    def __init__(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        category: Optional[str] = None,
    ):
        self.date_from = date_from
        self.date_to = date_to
        self.category = category or None
