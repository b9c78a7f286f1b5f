"""
商品领域模型包。
提供分类、商品、评价和库存变动相关的实体、值对象、仓储接口和领域服务。
"""

from products.domain.entities import (
    Category,
    Product,
    ProductStatus,
    ProductReview,
    StockMovement,
    StockReason,
)
from products.domain.value_objects import Rating, ReviewText, RATING_MIN, RATING_MAX, REVIEW_MAX_LENGTH
from products.domain.repositories import (
    ProductRepository,
    CategoryRepository,
    ProductReviewRepository,
    StockMovementRepository,
)
from products.domain.services import ProductService

__all__ = [
    'Category',
    'Product',
    'ProductStatus',
    'ProductReview',
    'StockMovement',
    'StockReason',
    'Rating',
    'ReviewText',
    'RATING_MIN',
    'RATING_MAX',
    'REVIEW_MAX_LENGTH',
    'ProductRepository',
    'CategoryRepository',
    'ProductReviewRepository',
    'StockMovementRepository',
    'ProductService',
]
