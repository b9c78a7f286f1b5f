"""
购物车API视图。
提供购物车和收藏接口，未登录用户读取时返回空列表。
"""

from django.conf import settings
from rest_framework.permissions import IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.response import StatusCode
from carts.application import (
    CartApplicationService,
    CartDTO,
    FavoriteListDTO,
    AddToCartCommand,
    UpdateCartItemCommand,
    RemoveCartItemCommand,
    AddFavoriteCommand,
    RemoveFavoriteCommand,
)
from carts.api.serializers import (
    CartAddSerializer,
    CartUpdateSerializer,
    CartRemoveSerializer,
    FavoriteAddSerializer,
    FavoriteRemoveSerializer,
)


def get_cart_service() -> CartApplicationService:
    """获取购物车应用服务实例"""
    from core.infrastructure.transaction import DjangoTransactionManager
    from carts.infrastructure.factory import CartInfrastructureFactory

    factory = CartInfrastructureFactory(
        currency=getattr(settings, 'SHOP_SETTINGS', {}).get('CURRENCY', 'USD'),
    )
    return CartApplicationService(
        cart_repository=factory.create_cart_repository(),
        favorite_repository=factory.create_favorite_repository(),
        product_repository=factory.create_product_repository(),
        transaction_manager=DjangoTransactionManager(),
    )


# ==================== 购物车 ====================

class CartAddView(ApiBaseView):
    """加入购物车接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        item = get_cart_service().add_to_cart(AddToCartCommand(
            user_id=request.user.pk,
            product_id=serializer.validated_data['productId'],
            quantity=serializer.validated_data['quantity'],
        ))
        return self.success_response(data=item.to_dict(), message="已加入购物车")


class CartFetchView(ApiBaseView):
    """获取购物车接口"""

    def get(self, request):
        if not request.user.is_authenticated:
            return self.success_response(data=CartDTO.empty().to_dict())
        cart = get_cart_service().get_cart(request.user.pk)
        return self.success_response(data=cart.to_dict(), message="获取购物车成功")


class CartUpdateView(ApiBaseView):
    """修改购物车商品数量接口"""
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        serializer = CartUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        item = get_cart_service().update_quantity(UpdateCartItemCommand(
            user_id=request.user.pk,
            item_id=serializer.validated_data['itemId'],
            quantity=serializer.validated_data['quantity'],
        ))
        return self.success_response(data=item.to_dict(), message="购物车已更新", code=StatusCode.UPDATED)


class CartRemoveView(ApiBaseView):
    """移除购物车商品接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CartRemoveSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        deleted = get_cart_service().remove_item(RemoveCartItemCommand(
            user_id=request.user.pk,
            item_id=serializer.validated_data['itemId'],
        ))
        return self.success_response(data={'deleted': deleted}, message="已从购物车移除", code=StatusCode.DELETED)


# ==================== 收藏 ====================

class FavoriteAddView(ApiBaseView):
    """收藏商品接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = FavoriteAddSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        favorite = get_cart_service().add_favorite(AddFavoriteCommand(
            user_id=request.user.pk,
            product_id=serializer.validated_data['productId'],
        ))
        return self.created_response(data=favorite.to_dict(), message="已加入收藏")


class FavoriteFetchView(ApiBaseView):
    """获取收藏列表接口"""

    def get(self, request):
        if not request.user.is_authenticated:
            return self.success_response(data=FavoriteListDTO([]).to_dict())
        favorites = get_cart_service().list_favorites(request.user.pk)
        return self.success_response(data=favorites.to_dict(), message="获取收藏成功")


class FavoriteRemoveView(ApiBaseView):
    """取消收藏接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = FavoriteRemoveSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        deleted = get_cart_service().remove_favorite(RemoveFavoriteCommand(
            user_id=request.user.pk,
            product_id=serializer.validated_data['productId'],
        ))
        return self.success_response(data={'deleted': deleted}, message="已取消收藏", code=StatusCode.DELETED)
