"""
购物车和收藏仓储的Django实现。
"""
from typing import Any, List, Optional

from django.db import transaction

from core.domain.value_objects import Money
from carts.domain.entities import Cart, CartItem, Favorite
from carts.domain.repositories import CartRepository, FavoriteRepository
from carts.infrastructure.models.cart_models import (
    Cart as CartModel,
    CartItem as CartItemModel,
    Favorite as FavoriteModel,
)
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository


class DjangoCartRepository(CartRepository):
    """
    基于Django ORM的购物车仓储实现。
    """

    def __init__(self, product_repository: DjangoProductRepository):
        self.product_repository = product_repository

    def get_for_user(self, user_id: Any) -> Optional[Cart]:
        model = CartModel.objects.filter(user_id=user_id).first()
        if not model:
            return None
        return self._to_domain_entity(model)

    def get_or_create_for_user(self, user_id: Any) -> Cart:
        model, _ = CartModel.objects.get_or_create(user_id=user_id)
        return self._to_domain_entity(model)

    def save(self, cart: Cart) -> Cart:
        """
        保存购物车及其商品行。

        Args:
            cart: 购物车聚合

        Returns:
            保存后的购物车
        """
        with transaction.atomic():
            model, _ = CartModel.objects.get_or_create(id=cart.id, defaults={'user_id': cart.user_id})
            kept_ids = [item.id for item in cart.items]
            model.items.exclude(id__in=kept_ids).delete()

            for item in cart.items:
                item_model, _ = CartItemModel.objects.update_or_create(
                    id=item.id,
                    defaults={
                        'cart': model,
                        'product_id': item.product_id,
                        'quantity': item.quantity,
                        'price_at_time': item.price_at_time.amount,
                    }
                )
                item.created_at = item_model.created_at

            # 刷新购物车的更新时间
            model.save(update_fields=['updated_at'])
            cart.publish_domain_events()
            return cart

    def _to_domain_entity(self, model: CartModel) -> Cart:
        item_models = model.items.select_related('product__category').order_by('-created_at')
        items = [
            CartItem(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity,
                price_at_time=Money(item.price_at_time, self.product_repository.currency),
                product=self.product_repository.to_domain_entity(item.product),
                created_at=item.created_at,
            )
            for item in item_models
        ]
        return Cart(id=model.id, user_id=model.user_id, items=items)


class DjangoFavoriteRepository(FavoriteRepository):
    """
    基于Django ORM的收藏仓储实现。
    """

    def __init__(self, product_repository: DjangoProductRepository):
        self.product_repository = product_repository

    def exists(self, user_id: Any, product_id: Any) -> bool:
        return FavoriteModel.objects.filter(user_id=user_id, product_id=product_id).exists()

    def add(self, favorite: Favorite) -> Favorite:
        model = FavoriteModel.objects.create(
            id=favorite.id,
            user_id=favorite.user_id,
            product_id=favorite.product_id,
        )
        favorite.created_at = model.created_at
        return favorite

    def list_for_user(self, user_id: Any) -> List[Favorite]:
        models = (
            FavoriteModel.objects
            .filter(user_id=user_id)
            .select_related('product__category')
            .order_by('-created_at')
        )
        return [
            Favorite(
                id=model.id,
                user_id=model.user_id,
                product_id=model.product_id,
                product=self.product_repository.to_domain_entity(model.product),
                created_at=model.created_at,
            )
            for model in models
        ]

    def remove(self, user_id: Any, product_id: Any) -> int:
        queryset = FavoriteModel.objects.filter(user_id=user_id, product_id=product_id)
        deleted = queryset.count()
        queryset.delete()
        return deleted
