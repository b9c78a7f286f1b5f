"""
商品评价和库存变动仓储的Django实现。
"""
from typing import Any, List

from products.domain.repositories import ProductReviewRepository, StockMovementRepository
from products.domain.entities import ProductReview, StockMovement
from products.infrastructure.models.product_models import (
    ProductReview as ProductReviewModel,
    StockMovement as StockMovementModel,
)


class DjangoProductReviewRepository(ProductReviewRepository):
    """基于Django ORM的商品评价仓储实现"""

    def exists(self, user_id: Any, order_id: Any, product_id: Any) -> bool:
        return ProductReviewModel.objects.filter(
            user_id=user_id,
            order_id=order_id,
            product_id=product_id,
        ).exists()

    def add(self, review: ProductReview) -> ProductReview:
        model = ProductReviewModel.objects.create(
            id=review.id,
            user_id=review.user_id,
            order_id=review.order_id,
            product_id=review.product_id,
            rating=review.rating,
            review=review.review,
        )
        review.created_at = model.created_at
        return review

    def ratings_for_product(self, product_id: Any) -> List[int]:
        return list(ProductReviewModel.objects.filter(product_id=product_id).values_list('rating', flat=True))


class DjangoStockMovementRepository(StockMovementRepository):
    """基于Django ORM的库存变动仓储实现"""

    def add(self, movement: StockMovement) -> StockMovement:
        model = StockMovementModel.objects.create(
            product_id=movement.product_id,
            order_id=movement.order_id,
            quantity_change=movement.quantity_change,
            reason=movement.reason,
        )
        movement.id = model.id
        movement.created_at = model.created_at
        return movement
