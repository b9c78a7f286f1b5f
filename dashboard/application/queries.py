"""
报表应用服务层的查询对象。
"""
from datetime import datetime
from typing import Optional

from dashboard.domain import Granularity, ReportFilter


class ReportQuery:
    """报表查询"""

    def __init__(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        category: Optional[str] = None,
        granularity: str = Granularity.MONTH,
    ):
        """
        初始化报表查询。

        Args:
            date_from: 开始时间，包含
            date_to: 结束时间，包含
            category: 分类标识
            granularity: 销售趋势的时间粒度
        """
        self.date_from = date_from
        self.date_to = date_to
        self.category = category or None
        self.granularity = granularity if granularity in Granularity.ALL else Granularity.MONTH

    def to_filter(self) -> ReportFilter:
        return ReportFilter(date_from=self.date_from, date_to=self.date_to, category=self.category)
