"""
商品应用服务层。
"""

from products.application.product_service import ProductApplicationService
from products.application.commands import (
    CreateProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    BulkDeleteProductsCommand,
)
from products.application.queries import GetProductQuery, SearchProductsQuery, GetCategoryQuery
from products.application.dtos import ProductDTO, ProductListDTO, CategoryDTO, CategoryDetailDTO

__all__ = [
    'ProductApplicationService',
    'CreateProductCommand',
    'UpdateProductCommand',
    'DeleteProductCommand',
    'BulkDeleteProductsCommand',
    'GetProductQuery',
    'SearchProductsQuery',
    'GetCategoryQuery',
    'ProductDTO',
    'ProductListDTO',
    'CategoryDTO',
    'CategoryDetailDTO',
]
