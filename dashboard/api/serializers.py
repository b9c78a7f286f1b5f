"""
报表API序列化器。
"""
from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from dashboard.domain import Granularity


def _parse_boundary(value: str, end_of_day: bool) -> datetime:
    """
    解析ISO日期或日期时间。
    只有日期时，开始时间取当天0点，结束时间取当天最后一刻。
    """
    value = (value or "").strip()
    try:
        parsed = parse_datetime(value)
    except ValueError:
        parsed = None
    if parsed is None:
        try:
            day = parse_date(value)
        except ValueError:
            day = None
        if day is None:
            raise serializers.ValidationError("日期格式无效，应为ISO日期或日期时间")
        parsed = datetime.combine(day, time.max if end_of_day else time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class ReportFilterSerializer(serializers.Serializer):
    """报表过滤参数序列化器"""
    dateFrom = serializers.CharField(required=False, allow_blank=True)
    dateTo = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    granularity = serializers.ChoiceField(choices=Granularity.ALL, required=False, default=Granularity.MONTH)

    def validate_dateFrom(self, value):
        return _parse_boundary(value, end_of_day=False) if value else None

    def validate_dateTo(self, value):
        return _parse_boundary(value, end_of_day=True) if value else None

    def validate(self, attrs):
        date_from = attrs.get('dateFrom')
        date_to = attrs.get('dateTo')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({'dateTo': "结束时间不能早于开始时间"})
        return attrs
