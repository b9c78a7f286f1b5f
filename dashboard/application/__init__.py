"""
报表应用层包。
"""

from dashboard.application.report_service import ReportApplicationService
from dashboard.application.queries import ReportQuery
from dashboard.application.dtos import AnalyticsDTO

__all__ = [
    'ReportApplicationService',
    'ReportQuery',
    'AnalyticsDTO',
]
