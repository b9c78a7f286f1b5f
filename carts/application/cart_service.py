"""
购物车应用服务。
处理购物车和收藏相关的命令和查询。
"""
from typing import Any, List

from loguru import logger
from core.domain import EntityNotFoundException, DuplicateEntityException
from core.infrastructure.transaction import TransactionManager

from carts.domain import CartRepository, FavoriteRepository, Favorite
from carts.application.commands import (
    AddToCartCommand,
    UpdateCartItemCommand,
    RemoveCartItemCommand,
    AddFavoriteCommand,
    RemoveFavoriteCommand,
)
from carts.application.dtos import CartItemDTO, CartDTO, FavoriteDTO, FavoriteListDTO
from products.domain import ProductRepository


class CartApplicationService:
    """
    购物车应用服务。
    协调购物车聚合、收藏仓储和商品仓储。
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        favorite_repository: FavoriteRepository,
        product_repository: ProductRepository,
        transaction_manager: TransactionManager,
    ):
        """
        初始化购物车应用服务。

        Args:
            cart_repository: 购物车仓储
            favorite_repository: 收藏仓储
            product_repository: 商品仓储
            transaction_manager: 事务管理器
        """
        self.cart_repository = cart_repository
        self.favorite_repository = favorite_repository
        self.product_repository = product_repository
        self.transaction_manager = transaction_manager

    def _get_product(self, product_id: Any):
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        return product

    # ==================== 购物车 ====================

    def add_to_cart(self, command: AddToCartCommand) -> CartItemDTO:
        """
        把商品加入购物车，购物车不存在时自动创建。

        Args:
            command: 加入购物车命令

        Returns:
            新增或更新后的购物车商品DTO

        Raises:
            EntityNotFoundException: 商品不存在
            BusinessRuleViolationException: 商品已下架
            InsufficientStockException: 库存不足
        """
        try:
            with self.transaction_manager.start():
                product = self._get_product(command.product_id)
                cart = self.cart_repository.get_or_create_for_user(command.user_id)
                item = cart.add_product(product, command.quantity)
                self.cart_repository.save(cart)
                logger.info(f"用户 {command.user_id} 加入购物车: {product.id} x{item.quantity}")
                return CartItemDTO(item)
        except Exception as e:
            logger.error(f"加入购物车失败: {e}")
            raise

    def get_cart(self, user_id: Any) -> CartDTO:
        cart = self.cart_repository.get_for_user(user_id)
        if not cart:
            return CartDTO.empty()
        return CartDTO.from_entity(cart)

    def update_quantity(self, command: UpdateCartItemCommand) -> CartItemDTO:
        """
        修改购物车商品数量。

        Raises:
            EntityNotFoundException: 购物车或购物车商品不存在
            InsufficientStockException: 库存不足
        """
        try:
            with self.transaction_manager.start():
                cart = self.cart_repository.get_for_user(command.user_id)
                if not cart:
                    raise EntityNotFoundException("购物车商品", command.item_id)
                item = cart.update_quantity(command.item_id, command.quantity)
                self.cart_repository.save(cart)
                return CartItemDTO(item)
        except Exception as e:
            logger.error(f"修改购物车数量失败: {e}")
            raise

    def remove_item(self, command: RemoveCartItemCommand) -> int:
        """
        从购物车移除一行商品。

        Returns:
            删除的行数

        Raises:
            EntityNotFoundException: 用户没有购物车
        """
        try:
            with self.transaction_manager.start():
                cart = self.cart_repository.get_for_user(command.user_id)
                if not cart:
                    raise EntityNotFoundException("购物车", command.user_id)
                deleted = cart.remove_item(command.item_id)
                if deleted:
                    self.cart_repository.save(cart)
                return deleted
        except Exception as e:
            logger.error(f"移除购物车商品失败: {e}")
            raise

    def remove_products(self, user_id: Any, product_ids: List[Any]) -> int:
        """下单后从购物车移除已购买的商品，调用方负责事务"""
        cart = self.cart_repository.get_for_user(user_id)
        if not cart:
            return 0
        removed = cart.remove_products(product_ids)
        if removed:
            self.cart_repository.save(cart)
        return removed

    # ==================== 收藏 ====================

    def add_favorite(self, command: AddFavoriteCommand) -> FavoriteDTO:
        """
        收藏商品。

        Raises:
            EntityNotFoundException: 商品不存在
            DuplicateEntityException: 已经收藏过
        """
        try:
            with self.transaction_manager.start():
                product = self._get_product(command.product_id)
                if self.favorite_repository.exists(command.user_id, product.id):
                    raise DuplicateEntityException("收藏", "商品已在收藏中")
                favorite = self.favorite_repository.add(
                    Favorite(user_id=command.user_id, product_id=product.id, product=product)
                )
                return FavoriteDTO(favorite)
        except Exception as e:
            logger.error(f"收藏商品失败: {e}")
            raise

    def list_favorites(self, user_id: Any) -> FavoriteListDTO:
        favorites = self.favorite_repository.list_for_user(user_id)
        return FavoriteListDTO([FavoriteDTO(favorite) for favorite in favorites])

    def remove_favorite(self, command: RemoveFavoriteCommand) -> int:
        with self.transaction_manager.start():
            return self.favorite_repository.remove(command.user_id, command.product_id)
