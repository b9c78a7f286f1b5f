"""
购物车API URL配置。
"""
from django.urls import path
from carts.api import views

urlpatterns = [
    path('cart/add', views.CartAddView.as_view(), name='cart-add'),
    path('cart/fetch', views.CartFetchView.as_view(), name='cart-fetch'),
    path('cart/update', views.CartUpdateView.as_view(), name='cart-update'),
    path('cart/remove', views.CartRemoveView.as_view(), name='cart-remove'),

    path('favorites/add', views.FavoriteAddView.as_view(), name='favorite-add'),
    path('favorites/fetch', views.FavoriteFetchView.as_view(), name='favorite-fetch'),
    path('favorites/remove', views.FavoriteRemoveView.as_view(), name='favorite-remove'),
]
