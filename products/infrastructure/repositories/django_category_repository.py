"""
分类仓储的Django实现。
"""
from typing import Any, List, Optional

from django.core.exceptions import ValidationError
from django.db.models import Count

from products.domain.repositories import CategoryRepository
from products.domain.entities import Category
from products.infrastructure.models.product_models import Category as CategoryModel


class DjangoCategoryRepository(CategoryRepository):
    """
    基于Django ORM的分类仓储实现。
    """

    def get_by_id(self, id: Any) -> Optional[Category]:
        try:
            return self._to_domain_entity(CategoryModel.objects.get(id=id))
        except (CategoryModel.DoesNotExist, ValidationError, ValueError, TypeError):
            return None

    def get_by_slug(self, slug: str) -> Optional[Category]:
        model = CategoryModel.objects.filter(slug=slug).first()
        return self._to_domain_entity(model) if model else None

    def list_all(self) -> List[Category]:
        """
        获取全部分类及各分类下的商品数量。

        Returns:
            按名称排序的分类列表
        """
        models = CategoryModel.objects.annotate(num_products=Count('products')).order_by('name')
        return [self._to_domain_entity(model) for model in models]

    def _to_domain_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            image=model.image,
            icon=model.icon,
            product_count=getattr(model, 'num_products', 0),
        )
