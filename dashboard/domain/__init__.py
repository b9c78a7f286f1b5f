"""
报表领域模型包。
"""

from dashboard.domain.value_objects import Granularity, ReportFilter, UNCATEGORIZED
from dashboard.domain.repositories import ReportRepository
from dashboard.domain.services import growth_percent, trend_growth, customer_growth

__all__ = [
    'Granularity',
    'ReportFilter',
    'UNCATEGORIZED',
    'ReportRepository',
    'growth_percent',
    'trend_growth',
    'customer_growth',
]
