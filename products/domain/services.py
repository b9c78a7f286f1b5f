"""
商品领域服务。
处理商品创建、信息修改、库存调整、下单扣库存和评分重算等跨实体的业务逻辑。
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.domain import (
    Money,
    DomainEvents,
    EntityNotFoundException,
    ProductRatingChangedEvent,
    ValidationException,
)
from products.domain.entities import Product, ProductStatus, StockMovement, StockReason
from products.domain.repositories import (
    ProductRepository,
    CategoryRepository,
    ProductReviewRepository,
    StockMovementRepository,
)
from products.domain.value_objects import Rating


class ProductService:
    """
    商品领域服务。
    所有库存变化都通过本服务完成，并记录对应的库存变动。
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        stock_movement_repository: StockMovementRepository,
        review_repository: Optional[ProductReviewRepository] = None,
    ):
        """
        初始化商品领域服务。

        Args:
            product_repository: 商品仓储
            category_repository: 分类仓储
            stock_movement_repository: 库存变动仓储
            review_repository: 评价仓储，只有重算评分时需要
        """
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.stock_movement_repository = stock_movement_repository
        self.review_repository = review_repository

    def _resolve_category(self, category_slug: Optional[str]):
        if not category_slug:
            return None
        category = self.category_repository.get_by_slug(category_slug)
        if not category:
            raise EntityNotFoundException("分类", category_slug)
        return category

    def create_product(
        self,
        name: str,
        price: Money,
        stock: int = 0,
        category_slug: Optional[str] = None,
        description: str = "",
        image: str = "",
        status: str = ProductStatus.ACTIVE,
        discount: Decimal = Decimal("0"),
        badge: str = "",
        specification: Optional[Dict[str, Any]] = None,
    ) -> Product:
        """
        创建商品，初始库存大于0时记录一条 initial 库存变动。

        Args:
            name: 商品名称
            price: 价格
            stock: 初始库存
            category_slug: 分类标识
            description: 描述
            image: 图片
            status: 状态
            discount: 折扣百分比
            badge: 角标
            specification: 规格

        Returns:
            创建的商品

        Raises:
            EntityNotFoundException: 分类不存在
            ValidationException: 价格或库存为负数
        """
        if price.amount < 0:
            raise ValidationException("price", "价格不能为负数")
        if stock < 0:
            raise ValidationException("stock", "库存不能为负数")
        if status not in ProductStatus.ALL:
            raise ValidationException("status", f"无效的商品状态: {status}")

        category = self._resolve_category(category_slug)
        product = Product(
            name=name,
            description=description,
            price=price,
            discount=discount,
            image=image,
            specification=specification,
            status=status,
            stock=stock,
            badge=badge,
            category_id=category.id if category else None,
        )
        product = self.product_repository.save(product)

        if stock > 0:
            self.stock_movement_repository.add(StockMovement(
                product_id=product.id,
                quantity_change=stock,
                reason=StockReason.INITIAL,
            ))
        return product

    def update_product(
        self,
        product_id: Any,
        name: str,
        price: Money,
        stock: int,
        category_slug: Optional[str] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
        status: Optional[str] = None,
        discount: Optional[Decimal] = None,
        badge: Optional[str] = None,
        specification: Optional[Dict[str, Any]] = None,
    ) -> Product:
        """
        更新商品信息，库存变化时记录一条 adjustment 库存变动。

        Raises:
            EntityNotFoundException: 商品或分类不存在
            ValidationException: 价格或库存为负数
        """
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)

        if category_slug is not None:
            category = self._resolve_category(category_slug)
            product.category_id = category.id if category else None

        product.update_details(
            name=name,
            price=price,
            description=description,
            image=image,
            status=status,
            discount=discount,
            badge=badge,
            specification=specification,
        )
        change = product.adjust_stock(stock, StockReason.ADJUSTMENT)
        product = self.product_repository.save(product)

        if change:
            self.stock_movement_repository.add(StockMovement(
                product_id=product.id,
                quantity_change=change,
                reason=StockReason.ADJUSTMENT,
            ))
        return product

    def delete_product(self, product_id: Any) -> Product:
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        self.product_repository.delete(product)
        return product

    def sell_products(self, quantities: Dict[str, int], order_id: Any = None) -> List[Product]:
        """
        下单扣减库存。
        先锁定并检查全部商品，任何一个库存不足都不会修改数据。

        Args:
            quantities: 商品ID字符串到购买数量的映射
            order_id: 订单ID

        Returns:
            扣减后的商品列表

        Raises:
            EntityNotFoundException: 商品不存在
            InsufficientStockException: 库存不足
        """
        products = self.product_repository.get_by_ids(list(quantities.keys()), for_update=True)
        for product_id, quantity in quantities.items():
            product = products.get(product_id)
            if not product:
                raise EntityNotFoundException("商品", product_id)
            product.ensure_stock(quantity)

        sold = []
        for product_id, quantity in quantities.items():
            product = products[product_id]
            product.sell(quantity)
            sold.append(self.product_repository.save(product))
            self.stock_movement_repository.add(StockMovement(
                product_id=product.id,
                quantity_change=-quantity,
                reason=StockReason.ORDER,
                order_id=order_id,
            ))
        return sold

    def recalculate_rating(self, product_id: Any) -> Decimal:
        """
        根据全部评价重新计算商品平均评分。
        发布 ProductRatingChangedEvent，使商品详情缓存失效。

        Returns:
            新的平均评分
        """
        rating = Rating.average(self.review_repository.ratings_for_product(product_id))
        self.product_repository.update_rating(product_id, rating)
        DomainEvents.publish(ProductRatingChangedEvent(product_id, rating))
        return rating
