# 引用基础设施层的模型
from carts.infrastructure.models.cart_models import (
    Cart,
    CartItem,
    Favorite,
)
