"""
报表应用服务。
为后台提供销售汇总、客户、商品、销售明细、汇总指标和分析数据。
"""
from typing import Any, Dict, List

from loguru import logger

from dashboard.domain import ReportRepository, trend_growth, customer_growth
from dashboard.application.queries import ReportQuery
from dashboard.application.dtos import AnalyticsDTO, serialize_row, serialize_rows


class ReportApplicationService:
    """
    报表应用服务。
    只读，不需要事务。
    """

    def __init__(self, report_repository: ReportRepository):
        self.report_repository = report_repository

    def sales_summary(self, query: ReportQuery) -> List[Dict[str, Any]]:
        return serialize_rows(self.report_repository.sales_summary(query.to_filter()))

    def customers_report(self, query: ReportQuery) -> List[Dict[str, Any]]:
        return serialize_rows(self.report_repository.customers(query.to_filter()))

    def products_report(self, query: ReportQuery) -> List[Dict[str, Any]]:
        return serialize_rows(self.report_repository.products(query.to_filter()))

    def sales_report(self, query: ReportQuery) -> List[Dict[str, Any]]:
        return serialize_rows(self.report_repository.sales(query.to_filter()))

    def stats(self, query: ReportQuery) -> Dict[str, Any]:
        return serialize_row(self.report_repository.stats(query.to_filter()))

    def analytics(self, query: ReportQuery) -> AnalyticsDTO:
        """
        汇总后台分析数据。

        增长率取销售趋势最后两个周期比较，上一周期为0时为100，不足两个周期时为0。

        Args:
            query: 报表查询

        Returns:
            分析数据DTO
        """
        report_filter = query.to_filter()
        try:
            trend = self.report_repository.sales_trend(report_filter, query.granularity)
            customers = self.report_repository.customers(report_filter)
            return AnalyticsDTO(
                sales_trend=trend,
                category_performance=self.report_repository.category_performance(report_filter),
                top_products=self.report_repository.top_products(report_filter),
                customer_growth=customer_growth(customers),
                revenue_growth=trend_growth(trend, 'revenue'),
                orders_growth=trend_growth(trend, 'orders'),
            )
        except Exception as e:
            logger.error(f"生成分析数据失败: {e}")
            raise
