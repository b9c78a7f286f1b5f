"""
后台报表API视图。
所有接口仅管理员可访问。
"""

from rest_framework.permissions import IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminRole
from dashboard.application import ReportApplicationService, ReportQuery
from dashboard.api.serializers import ReportFilterSerializer


def get_report_service() -> ReportApplicationService:
    """获取报表应用服务实例"""
    from dashboard.infrastructure.repositories.django_report_repository import DjangoReportRepository

    return ReportApplicationService(report_repository=DjangoReportRepository())


class ReportBaseView(ApiBaseView):
    """报表视图基类，解析公共过滤参数"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def build_query(self, request):
        """
        解析过滤参数。

        Returns:
            (查询, 序列化器) 元组，参数无效时查询为None
        """
        serializer = ReportFilterSerializer(data=request.query_params)
        if not serializer.is_valid():
            return None, serializer
        data = serializer.validated_data
        query = ReportQuery(
            date_from=data.get('dateFrom'),
            date_to=data.get('dateTo'),
            category=data.get('category'),
            granularity=data.get('granularity'),
        )
        return query, serializer


class SalesSummaryView(ReportBaseView):
    """商品销售汇总接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        return self.success_response(data=get_report_service().sales_summary(query), message="获取销售汇总成功")


class CustomersReportView(ReportBaseView):
    """客户报表接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        return self.success_response(data=get_report_service().customers_report(query), message="获取客户报表成功")


class ProductsReportView(ReportBaseView):
    """商品报表接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        return self.success_response(data=get_report_service().products_report(query), message="获取商品报表成功")


class SalesReportView(ReportBaseView):
    """销售明细报表接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        return self.success_response(data=get_report_service().sales_report(query), message="获取销售报表成功")


class StatsReportView(ReportBaseView):
    """汇总指标接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        return self.success_response(data=get_report_service().stats(query), message="获取统计数据成功")


class AnalyticsView(ReportBaseView):
    """后台分析接口"""

    def get(self, request):
        query, serializer = self.build_query(request)
        if query is None:
            return self.invalid_response(serializer)
        analytics = get_report_service().analytics(query)
        return self.success_response(data=analytics.to_dict(), message="获取分析数据成功")
