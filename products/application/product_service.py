"""
商品应用服务。
后台商品维护在事务内完成，写操作成功后使商品详情缓存失效；
前台详情查询优先读缓存。
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain import Money, EntityNotFoundException
from core.infrastructure.transaction import TransactionManager
from products.domain.services import ProductService
from products.domain.repositories import ProductRepository, CategoryRepository
from products.infrastructure.services.cache_manager import ProductCacheManager
from products.application.dtos import (
    ProductDTO,
    ProductListDTO,
    CategoryDTO,
    CategoryDetailDTO,
)
from products.application.commands import (
    CreateProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    BulkDeleteProductsCommand,
)
from products.application.queries import (
    GetProductQuery,
    SearchProductsQuery,
    GetCategoryQuery,
)

EDITABLE_FIELDS = ('stock', 'description', 'image', 'status', 'discount', 'badge', 'specification')


class ProductApplicationService:

    def __init__(
        self,
        product_service: ProductService,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        transaction_manager: TransactionManager,
        cache_manager: Optional[ProductCacheManager] = None,
        currency: str = "USD"
    ):
        self.product_service = product_service
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.transaction_manager = transaction_manager
        self.cache_manager = cache_manager
        self.currency = currency

    def _field_values(self, command) -> Dict[str, Any]:
        values = {name: getattr(command, name) for name in EDITABLE_FIELDS}
        values.update(
            name=command.name,
            price=Money(command.price, self.currency),
            category_slug=command.category,
        )
        return values

    def _forget(self, *product_ids) -> None:
        if self.cache_manager:
            for product_id in product_ids:
                self.cache_manager.invalidate_product(product_id)

    # ---- 后台维护 ----

    def create_product(self, command: CreateProductCommand) -> ProductDTO:
        """
        创建商品。分类按 slug 查找，不存在时抛出 EntityNotFoundException。
        """
        with self.transaction_manager.start():
            product = self.product_service.create_product(**self._field_values(command))
        logger.info(f"商品已创建: {product.name} ({product.id})")
        return ProductDTO.from_entity(product)

    def update_product(self, command: UpdateProductCommand) -> ProductDTO:
        with self.transaction_manager.start():
            product = self.product_service.update_product(product_id=command.id, **self._field_values(command))
        self._forget(product.id)
        return ProductDTO.from_entity(product)

    def delete_product(self, command: DeleteProductCommand) -> ProductDTO:
        """删除商品，返回被删除商品的快照用于提示信息"""
        with self.transaction_manager.start():
            product = self.product_service.delete_product(command.id)
        self._forget(product.id)
        logger.info(f"商品已删除: {product.name} ({product.id})")
        return ProductDTO.from_entity(product)

    def bulk_delete_products(self, command: BulkDeleteProductsCommand) -> int:
        with self.transaction_manager.start():
            deleted = self.product_repository.delete_many(command.ids)
        self._forget(*command.ids)
        logger.info(f"批量删除商品 {deleted}/{len(command.ids)}")
        return deleted

    # ---- 查询 ----

    def get_product(self, query: GetProductQuery) -> ProductDTO:
        """
        商品详情。

        Raises:
            EntityNotFoundException: 商品不存在
        """
        cached = self.cache_manager.get_product(query.id) if self.cache_manager else None
        if cached:
            return ProductDTO.from_dict(cached)

        product = self.product_repository.get_by_id(query.id)
        if product is None:
            raise EntityNotFoundException("商品", query.id)

        dto = ProductDTO.from_entity(product)
        if self.cache_manager:
            self.cache_manager.set_product(query.id, dto.__dict__)
        return dto

    def search_products(self, query: SearchProductsQuery) -> ProductListDTO:
        filters = {key: value for key, value in (('status', query.status), ('category', query.category)) if value}
        products, total = self.product_repository.search(
            keyword=query.keyword,
            filters=filters,
            page=query.page,
            page_size=query.page_size,
        )
        return ProductListDTO(
            items=[ProductDTO.from_entity(product) for product in products],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    def list_categories(self) -> List[CategoryDTO]:
        return [CategoryDTO.from_entity(category) for category in self.category_repository.list_all()]

    def get_category(self, query: GetCategoryQuery) -> CategoryDetailDTO:
        """
        分类及其全部商品。

        Raises:
            EntityNotFoundException: slug 不存在
        """
        category = self.category_repository.get_by_slug(query.slug)
        if category is None:
            raise EntityNotFoundException("分类", query.slug)

        return CategoryDetailDTO(
            category=CategoryDTO.from_entity(category),
            products=[ProductDTO.from_entity(p) for p in self.product_repository.list_by_category(category.id)],
        )
