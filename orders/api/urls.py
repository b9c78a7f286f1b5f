"""
订单API URL配置。
"""
from django.urls import path
from orders.api import views

urlpatterns = [
    # 结算
    path('promos/apply', views.PromoApplyView.as_view(), name='promo-apply'),
    path('checkout/quote', views.CheckoutQuoteView.as_view(), name='checkout-quote'),

    # 订单
    path('orders', views.OrderCreateView.as_view(), name='order-create'),
    path('orders/list', views.OrderListView.as_view(), name='order-list'),
    path('orders/complete', views.OrderCompleteView.as_view(), name='order-complete'),
    path('orders/<str:order_id>', views.OrderDetailView.as_view(), name='order-detail'),

    # 评价
    path('reviews', views.ReviewCreateView.as_view(), name='review-create'),

    # 后台订单管理
    path('admin/orders', views.AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/<str:order_id>/status', views.AdminOrderStatusView.as_view(), name='admin-order-status'),
]
