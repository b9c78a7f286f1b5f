"""
商品仓储的Django实现。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from core.domain.value_objects import Money
from products.domain.repositories import ProductRepository
from products.domain.entities import Product
from products.infrastructure.models.product_models import Product as ProductModel


class DjangoProductRepository(ProductRepository):
    """
    基于Django ORM的商品仓储实现。
    保存成功后发布商品上待发布的领域事件。
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    def _queryset(self):
        return ProductModel.objects.select_related('category')

    def get_by_id(self, id: Any) -> Optional[Product]:
        """
        根据ID获取商品。

        Args:
            id: 商品ID

        Returns:
            找到的商品，如果不存在则返回None
        """
        try:
            return self.to_domain_entity(self._queryset().get(id=id))
        except (ProductModel.DoesNotExist, ValidationError, ValueError, TypeError):
            return None

    def get_by_ids(self, ids: List[Any], for_update: bool = False) -> Dict[str, Product]:
        queryset = ProductModel.objects.filter(id__in=ids)
        if for_update:
            queryset = queryset.select_for_update()
        return {str(model.id): self.to_domain_entity(model) for model in queryset}

    def save(self, product: Product) -> Product:
        """
        保存商品，返回同一个商品对象并刷新时间戳和分类信息。

        Args:
            product: 要保存的商品

        Returns:
            保存后的商品
        """
        with transaction.atomic():
            model, _ = ProductModel.objects.update_or_create(
                id=product.id,
                defaults={
                    'name': product.name,
                    'description': product.description,
                    'price': product.price.amount,
                    'discount': product.discount,
                    'image': product.image,
                    'rating': product.rating,
                    'sales': product.sales,
                    'specification': product.specification,
                    'status': product.status,
                    'stock': product.stock,
                    'badge': product.badge,
                    'category_id': product.category_id,
                }
            )
            product.date_added = model.date_added
            product.updated_at = model.updated_at
            category = model.category
            product.category_name = category.name if category else None
            product.category_slug = category.slug if category else None

            product.publish_domain_events()
            return product

    def delete(self, product: Product) -> None:
        ProductModel.objects.filter(id=product.id).delete()

    def delete_many(self, ids: List[Any]) -> int:
        queryset = ProductModel.objects.filter(id__in=ids)
        deleted = queryset.count()
        queryset.delete()
        return deleted

    def update_rating(self, product_id: Any, rating: Any) -> None:
        ProductModel.objects.filter(id=product_id).update(rating=rating)

    def list_by_category(self, category_id: Any) -> List[Product]:
        models = self._queryset().filter(category_id=category_id).order_by('name')
        return [self.to_domain_entity(model) for model in models]

    def search(
        self,
        keyword: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Product], int]:
        """
        搜索商品，按上架时间倒序。

        Args:
            keyword: 名称关键词
            filters: 过滤条件，支持 status 和 category（分类标识）
            page: 页码
            page_size: 每页大小

        Returns:
            商品列表和总数的元组
        """
        queryset = self._queryset()
        if keyword:
            queryset = queryset.filter(name__icontains=keyword)

        filters = filters or {}
        if filters.get('status'):
            queryset = queryset.filter(status=filters['status'])
        if filters.get('category'):
            queryset = queryset.filter(category__slug=filters['category'])

        total = queryset.count()
        offset = (page - 1) * page_size
        models = queryset.order_by('-date_added', 'name')[offset:offset + page_size]
        return [self.to_domain_entity(model) for model in models], total

    def to_domain_entity(self, model: ProductModel) -> Product:
        """把商品模型转换为领域实体，购物车和订单仓储也用它还原商品快照"""
        category = model.category if model.category_id else None
        return Product(
            id=model.id,
            name=model.name,
            description=model.description,
            price=Money(model.price, self.currency),
            discount=model.discount,
            image=model.image,
            rating=model.rating,
            sales=model.sales,
            specification=model.specification,
            status=model.status,
            stock=model.stock,
            badge=model.badge,
            category_id=model.category_id,
            category_name=category.name if category else None,
            category_slug=category.slug if category else None,
            date_added=model.date_added,
            updated_at=model.updated_at,
        )
