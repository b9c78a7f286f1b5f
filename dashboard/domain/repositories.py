"""
报表查询接口。
报表只读，聚合全部在数据库端完成。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from dashboard.domain.value_objects import ReportFilter


class ReportRepository(ABC):
    """
    报表查询仓储接口。
    返回的行都是普通字典，金额为Decimal。
    """

    @abstractmethod
    def sales_summary(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        """已完成订单中每个商品的销量和销售额，按销售额倒序"""
        pass

    @abstractmethod
    def customers(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        """时间范围内有订单的客户，按消费总额倒序"""
        pass

    @abstractmethod
    def products(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        """全部商品及其在已完成订单中的销量和销售额，按销售额倒序"""
        pass

    @abstractmethod
    def sales(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        """时间范围内的订单商品明细，按下单时间倒序"""
        pass

    @abstractmethod
    def stats(self, report_filter: ReportFilter) -> Dict[str, Any]:
        """已完成订单的汇总指标"""
        pass

    @abstractmethod
    def sales_trend(self, report_filter: ReportFilter, granularity: str) -> List[Dict[str, Any]]:
        """
        已完成订单按时间周期汇总的销售趋势。

        Args:
            report_filter: 过滤条件
            granularity: day、week 或 month

        Returns:
            按时间升序的 {period, revenue, orders} 列表
        """
        pass

    @abstractmethod
    def category_performance(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def top_products(self, report_filter: ReportFilter, limit: int = 8) -> List[Dict[str, Any]]:
        pass
