"""
报表查询仓储的Django实现。
使用ORM聚合(GROUP BY)在数据库端完成统计。
"""
from decimal import Decimal
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Max, Q, Sum, Value
from django.db.models.functions import Coalesce, TruncDay, TruncMonth, TruncWeek

from dashboard.domain import Granularity, ReportFilter, ReportRepository, UNCATEGORIZED
from orders.domain import OrderStatus
from orders.infrastructure.models.order_models import Order, OrderItem
from products.infrastructure.models.product_models import Product

MONEY_FIELD = DecimalField(max_digits=14, decimal_places=2)
ZERO = Value(Decimal("0"), output_field=MONEY_FIELD)

TRUNC_FUNCTIONS = {
    Granularity.DAY: TruncDay,
    Granularity.WEEK: TruncWeek,
    Granularity.MONTH: TruncMonth,
}

PERIOD_FORMATS = {
    Granularity.DAY: "%Y-%m-%d",
    Granularity.WEEK: "%Y-%m-%d",
    Granularity.MONTH: "%Y-%m",
}


def _line_revenue(prefix: str = ""):
    return ExpressionWrapper(
        F(f"{prefix}quantity") * F(f"{prefix}price_at_time"),
        output_field=MONEY_FIELD,
    )


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(Decimal("0.01"))


class DjangoReportRepository(ReportRepository):
    """
    基于Django ORM的报表查询实现。
    """

    # ==================== 查询集 ====================

    def _orders(self, report_filter: ReportFilter, completed: bool = False):
        queryset = Order.objects.all()
        if completed:
            queryset = queryset.filter(status=OrderStatus.COMPLETED)
        if report_filter.date_from:
            queryset = queryset.filter(created_at__gte=report_filter.date_from)
        if report_filter.date_to:
            queryset = queryset.filter(created_at__lte=report_filter.date_to)
        return queryset

    def _items(self, report_filter: ReportFilter, completed: bool = False, with_category: bool = False):
        queryset = OrderItem.objects.all()
        if completed:
            queryset = queryset.filter(order__status=OrderStatus.COMPLETED)
        if report_filter.date_from:
            queryset = queryset.filter(order__created_at__gte=report_filter.date_from)
        if report_filter.date_to:
            queryset = queryset.filter(order__created_at__lte=report_filter.date_to)
        if with_category and report_filter.category:
            queryset = queryset.filter(product__category__slug=report_filter.category)
        return queryset

    def _completed_item_filter(self, report_filter: ReportFilter) -> Q:
        condition = Q(order_items__order__status=OrderStatus.COMPLETED)
        if report_filter.date_from:
            condition &= Q(order_items__order__created_at__gte=report_filter.date_from)
        if report_filter.date_to:
            condition &= Q(order_items__order__created_at__lte=report_filter.date_to)
        return condition

    # ==================== 报表 ====================

    def sales_summary(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        rows = (
            self._items(report_filter, completed=True)
            .values('product_id')
            .annotate(
                name=Coalesce(Max('product__name'), Max('product_name')),
                qty_sold=Sum('quantity'),
                total_revenue=Sum(_line_revenue()),
            )
            .order_by('-total_revenue', 'name')
        )
        return [
            {
                'product_id': str(row['product_id']) if row['product_id'] else None,
                'product_name': row['name'],
                'qty_sold': row['qty_sold'] or 0,
                'total_revenue': _money(row['total_revenue']),
            }
            for row in rows
        ]

    def customers(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        rows = (
            self._orders(report_filter)
            .values('user_id', 'user__fullname', 'user__email')
            .annotate(
                total_orders=Count('id'),
                total_spent=Sum('total'),
                last_order_date=Max('created_at'),
            )
            .order_by('-total_spent', 'user__email')
        )
        return [
            {
                'id': str(row['user_id']),
                'name': row['user__fullname'],
                'email': row['user__email'],
                'total_orders': row['total_orders'],
                'total_spent': _money(row['total_spent']),
                'last_order_date': row['last_order_date'],
            }
            for row in rows
        ]

    def products(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        condition = self._completed_item_filter(report_filter)
        queryset = Product.objects.select_related('category')
        if report_filter.category:
            queryset = queryset.filter(category__slug=report_filter.category)

        rows = (
            queryset
            .annotate(
                sold=Coalesce(Sum('order_items__quantity', filter=condition), 0),
                revenue=Coalesce(Sum(_line_revenue('order_items__'), filter=condition), ZERO),
            )
            .order_by('-revenue', 'name')
        )
        return [
            {
                'id': str(product.id),
                'name': product.name,
                'category': product.category.name if product.category else UNCATEGORIZED,
                'stock': product.stock,
                'sold': product.sold,
                'revenue': _money(product.revenue),
                'status': product.status,
            }
            for product in rows
        ]

    def sales(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        items = (
            self._items(report_filter, with_category=True)
            .select_related('order__user', 'product__category')
            .order_by('-order__created_at', 'id')
        )
        rows = []
        for item in items:
            product = item.product
            rows.append({
                'id': str(item.id),
                'order_id': str(item.order_id),
                'order_date': item.order.created_at,
                'product_name': product.name if product else item.product_name,
                'category': product.category.name if product and product.category else UNCATEGORIZED,
                'quantity': item.quantity,
                'unit_price': _money(item.price_at_time),
                'total_revenue': _money(item.price_at_time * item.quantity),
                'customer_name': item.order.user.fullname,
                'status': item.order.status,
            })
        return rows

    def stats(self, report_filter: ReportFilter) -> Dict[str, Any]:
        orders = self._orders(report_filter, completed=True)
        totals = orders.aggregate(total_revenue=Sum('total'), total_orders=Count('id'))
        items = OrderItem.objects.filter(order__in=orders)
        total_items = items.aggregate(total=Sum('quantity'))['total'] or 0

        top = (
            items
            .values('product_id')
            .annotate(name=Coalesce(Max('product__name'), Max('product_name')), sold=Sum('quantity'))
            .order_by('-sold', 'name')
            .first()
        )

        total_revenue = _money(totals['total_revenue'])
        total_orders = totals['total_orders'] or 0
        average = _money(total_revenue / total_orders) if total_orders else _money(0)
        return {
            'totalRevenue': total_revenue,
            'totalOrders': total_orders,
            'averageOrderValue': average,
            'totalItemsSold': total_items,
            'totalCustomers': get_user_model().objects.count(),
            'topProduct': top['name'] if top and top['name'] else '-',
        }

    # ==================== 分析 ====================

    def sales_trend(self, report_filter: ReportFilter, granularity: str) -> List[Dict[str, Any]]:
        trunc = TRUNC_FUNCTIONS.get(granularity, TruncMonth)
        period_format = PERIOD_FORMATS.get(granularity, PERIOD_FORMATS[Granularity.MONTH])
        rows = (
            self._items(report_filter, completed=True, with_category=True)
            .annotate(period=trunc('order__created_at'))
            .values('period')
            .annotate(revenue=Sum(_line_revenue()), orders=Count('order_id', distinct=True))
            .order_by('period')
        )
        return [
            {
                'period': row['period'].strftime(period_format),
                'revenue': _money(row['revenue']),
                'orders': row['orders'],
            }
            for row in rows
        ]

    def category_performance(self, report_filter: ReportFilter) -> List[Dict[str, Any]]:
        rows = (
            self._items(report_filter, completed=True, with_category=True)
            .annotate(category_name=Coalesce('product__category__name', Value(UNCATEGORIZED)))
            .values('category_name')
            .annotate(revenue=Sum(_line_revenue()), sold=Sum('quantity'))
            .order_by('-revenue', 'category_name')
        )
        return [
            {
                'category': row['category_name'],
                'revenue': _money(row['revenue']),
                'sold': row['sold'] or 0,
            }
            for row in rows
        ]

    def top_products(self, report_filter: ReportFilter, limit: int = 8) -> List[Dict[str, Any]]:
        rows = (
            self._items(report_filter, completed=True, with_category=True)
            .values('product_id')
            .annotate(
                name=Coalesce(Max('product__name'), Max('product_name')),
                sold=Sum('quantity'),
                revenue=Sum(_line_revenue()),
            )
            .order_by('-sold', 'name')[:limit]
        )
        return [
            {
                'id': str(row['product_id']) if row['product_id'] else None,
                'name': row['name'],
                'sold': row['sold'] or 0,
                'revenue': _money(row['revenue']),
            }
            for row in rows
        ]
