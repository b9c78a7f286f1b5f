"""后台报表接口测试"""
from datetime import datetime

import pytest
from django.utils import timezone

pytestmark = pytest.mark.django_db


def on(month, day=15):
    return timezone.make_aware(datetime(2026, month, day, 12, 0))


@pytest.fixture
def sales(user, other_user, make_product, make_order, category):
    """
    一月到三月的订单：
    Budi 一月买1个鼠标、三月买2个鼠标和1本书(均已完成)；
    Sari 二月买3本书(已完成)，三月买1个鼠标(已支付未完成)。
    """
    mouse = make_product(name="Gaming Mouse", price="100.00", category=category)
    book = make_product(name="Python Book", price="20.00")
    make_order(user, [(mouse, 1, "100.00")], created_at=on(1))
    make_order(user, [(mouse, 2, "100.00"), (book, 1, "20.00")], created_at=on(3))
    make_order(other_user, [(book, 3, "20.00")], created_at=on(2))
    make_order(other_user, [(mouse, 1, "100.00")], status="paid", created_at=on(3, 20))
    return mouse, book


def test_sales_summary_counts_completed_orders(admin_api_client, sales):
    mouse, book = sales

    response = admin_api_client.get('/api/admin/sales')

    assert response.status_code == 200
    assert response.json()['data'] == [
        {'product_id': str(mouse.id), 'product_name': "Gaming Mouse", 'qty_sold': 3, 'total_revenue': "300.00"},
        {'product_id': str(book.id), 'product_name': "Python Book", 'qty_sold': 4, 'total_revenue': "80.00"},
    ]


def test_sales_summary_date_range(admin_api_client, sales):
    _, book = sales

    response = admin_api_client.get('/api/admin/sales', {'dateFrom': "2026-02-01", 'dateTo': "2026-02-28"})

    rows = response.json()['data']
    assert [(row['product_id'], row['qty_sold'], row['total_revenue']) for row in rows] == [
        (str(book.id), 3, "60.00"),
    ]


def test_customers_report_includes_all_statuses(admin_api_client, sales, user, other_user):
    rows = admin_api_client.get('/api/admin/reports/customers').json()['data']

    assert [(row['email'], row['total_orders'], row['total_spent']) for row in rows] == [
        (user.email, 2, "320.00"),
        (other_user.email, 2, "160.00"),
    ]
    assert rows[0]['name'] == "Budi Santoso"
    assert rows[1]['last_order_date'].startswith("2026-03-20")


def test_products_report(admin_api_client, sales):
    rows = admin_api_client.get('/api/admin/reports/products').json()['data']

    assert [(row['name'], row['category'], row['sold'], row['revenue']) for row in rows] == [
        ("Gaming Mouse", "Electronics", 3, "300.00"),
        ("Python Book", "Uncategorized", 4, "80.00"),
    ]


def test_sales_report_filters_by_category(admin_api_client, sales):
    rows = admin_api_client.get('/api/admin/reports/sales', {'category': "electronics"}).json()['data']

    assert len(rows) == 3
    assert {row['product_name'] for row in rows} == {"Gaming Mouse"}
    assert rows[0]['status'] == "paid"
    assert rows[0]['customer_name'] == "Sari Dewi"
    assert rows[1]['total_revenue'] == "200.00"
    assert rows[1]['unit_price'] == "100.00"


def test_stats(admin_api_client, sales):
    data = admin_api_client.get('/api/admin/reports/stats').json()['data']

    assert data == {
        'totalRevenue': "380.00",
        'totalOrders': 3,
        'averageOrderValue': "126.67",
        'totalItemsSold': 7,
        'totalCustomers': 3,
        'topProduct': "Python Book",
    }


def test_stats_without_orders(admin_api_client):
    data = admin_api_client.get('/api/admin/reports/stats').json()['data']

    assert data['totalRevenue'] == "0.00"
    assert data['averageOrderValue'] == "0.00"
    assert data['topProduct'] == '-'


def test_analytics_by_month(admin_api_client, sales):
    data = admin_api_client.get('/api/admin/analytics').json()['data']

    assert data['salesTrend'] == [
        {'period': "2026-01", 'revenue': "100.00", 'orders': 1},
        {'period': "2026-02", 'revenue': "60.00", 'orders': 1},
        {'period': "2026-03", 'revenue': "220.00", 'orders': 1},
    ]
    assert data['revenueGrowth'] == 266.7
    assert data['ordersGrowth'] == 0.0
    assert data['categoryPerformance'] == [
        {'category': "Electronics", 'revenue': "300.00", 'sold': 3},
        {'category': "Uncategorized", 'revenue': "80.00", 'sold': 4},
    ]
    assert [product['name'] for product in data['topProducts']] == ["Python Book", "Gaming Mouse"]
    assert data['customerGrowth'] == [{'month': "2026-03", 'newCustomers': 2, 'returning': 2}]


def test_analytics_months_follow_local_time(admin_api_client, user, make_product, make_order):
    mouse = make_product(name="Gaming Mouse", price="100.00")
    make_order(user, [(mouse, 1, "100.00")], created_at=timezone.make_aware(datetime(2024, 2, 1, 3, 0)))

    data = admin_api_client.get('/api/admin/analytics').json()['data']

    assert [row['period'] for row in data['salesTrend']] == ["2024-02"]
    assert [row['month'] for row in data['customerGrowth']] == ["2024-02"]


def test_analytics_by_day_within_range(admin_api_client, sales):
    data = admin_api_client.get('/api/admin/analytics', {
        'granularity': "day",
        'dateFrom': "2026-03-01",
    }).json()['data']

    assert data['salesTrend'] == [{'period': "2026-03-15", 'revenue': "220.00", 'orders': 1}]
    assert data['revenueGrowth'] == 0.0


@pytest.mark.parametrize("params", [
    {'dateFrom': "2026-03-01", 'dateTo': "2026-02-01"},
    {'dateFrom': "yesterday"},
    {'granularity': "year"},
])
def test_invalid_filters(admin_api_client, params):
    response = admin_api_client.get('/api/admin/analytics', params)

    assert response.status_code == 400
    assert response.json()['code'] == 40001


def test_reports_require_admin_role(api_client, user_client):
    assert api_client.get('/api/admin/reports/stats').status_code == 401
    assert user_client.get('/api/admin/reports/stats').status_code == 403
