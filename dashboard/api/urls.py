"""
后台报表API URL配置。
"""
from django.urls import path
from dashboard.api import views

urlpatterns = [
    path('admin/sales', views.SalesSummaryView.as_view(), name='admin-sales'),
    path('admin/reports/customers', views.CustomersReportView.as_view(), name='admin-report-customers'),
    path('admin/reports/products', views.ProductsReportView.as_view(), name='admin-report-products'),
    path('admin/reports/sales', views.SalesReportView.as_view(), name='admin-report-sales'),
    path('admin/reports/stats', views.StatsReportView.as_view(), name='admin-report-stats'),
    path('admin/analytics', views.AnalyticsView.as_view(), name='admin-analytics'),
]
