"""
商品应用服务层的命令对象。
定义用于修改商品目录的命令。
"""
from typing import Any, Dict, List, Optional
from decimal import Decimal


class CreateProductCommand:
    """创建商品命令"""

    def __init__(
        self,
        name: str,
        price: Decimal,
        stock: int = 0,
        category: Optional[str] = None,
        description: str = "",
        image: str = "",
        status: str = "active",
        discount: Decimal = Decimal("0"),
        badge: str = "",
        specification: Optional[Dict[str, Any]] = None
    ):
        """
        初始化创建商品命令。

        Args:
            name: 商品名称
            price: 商品价格
            stock: 初始库存
            category: 分类标识(slug)
            description: 商品描述
            image: 商品图片
            status: 商品状态
            discount: 折扣百分比
            badge: 角标
            specification: 商品规格
        """
        self.name = name
        self.price = price
        self.stock = stock
        self.category = category
        self.description = description
        self.image = image
        self.status = status
        self.discount = discount
        self.badge = badge
        self.specification = specification


class UpdateProductCommand:
    """更新商品命令，name、price、stock 必填，其余为 None 时不修改"""

    def __init__(
        self,
        id: Any,
        name: str,
        price: Decimal,
        stock: int,
        category: Optional[str] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
        status: Optional[str] = None,
        discount: Optional[Decimal] = None,
        badge: Optional[str] = None,
        specification: Optional[Dict[str, Any]] = None
    ):
        self.id = id
        self.name = name
        self.price = price
        self.stock = stock
        self.category = category
        self.description = description
        self.image = image
        self.status = status
        self.discount = discount
        self.badge = badge
        self.specification = specification


class DeleteProductCommand:
    """删除商品命令"""

    def __init__(self, id: Any):
        self.id = id


class BulkDeleteProductsCommand:
    """批量删除商品命令"""

    def __init__(self, ids: List[Any]):
        self.ids = ids
