"""
商品API URL配置。
定义商品目录的路由映射。
"""
from django.urls import path
from products.api import views

# API URL模式
urlpatterns = [
    # 前台商品API
    path('products/search', views.ProductSearchView.as_view(), name='product-search'),
    path('products/<str:product_id>', views.ProductDetailView.as_view(), name='product-detail'),

    # 前台分类API
    path('categories/fetch', views.CategoryListView.as_view(), name='category-list'),
    path('categories/<slug:slug>', views.CategoryDetailView.as_view(), name='category-detail'),

    # 后台商品API
    path('admin/products', views.AdminProductListCreateView.as_view(), name='admin-product-list-create'),
    path('admin/products/bulk-delete', views.AdminProductBulkDeleteView.as_view(), name='admin-product-bulk-delete'),
    path('admin/products/<str:product_id>', views.AdminProductDetailView.as_view(), name='admin-product-detail'),
    path('admin/categories', views.AdminCategoryListView.as_view(), name='admin-category-list'),
]
