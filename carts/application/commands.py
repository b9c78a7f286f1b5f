"""
购物车应用服务层的命令对象。
"""
from typing import Any


class AddToCartCommand:
    """加入购物车命令"""

    def __init__(self, user_id: Any, product_id: Any, quantity: int = 1):
        """
        初始化加入购物车命令。

        Args:
            user_id: 用户ID
            product_id: 商品ID
            quantity: 加入数量
        """
        self.user_id = user_id
        self.product_id = product_id
        self.quantity = quantity


class UpdateCartItemCommand:
    """修改购物车商品数量命令"""

    def __init__(self, user_id: Any, item_id: Any, quantity: int):
        self.user_id = user_id
        self.item_id = item_id
        self.quantity = quantity


class RemoveCartItemCommand:
    def __init__(self, user_id: Any, item_id: Any):
        self.user_id = user_id
        self.item_id = item_id


class AddFavoriteCommand:
    def __init__(self, user_id: Any, product_id: Any):
        self.user_id = user_id
        self.product_id = product_id


class RemoveFavoriteCommand:
    def __init__(self, user_id: Any, product_id: Any):
        self.user_id = user_id
        self.product_id = product_id
