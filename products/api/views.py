"""
商品API视图。
前台：商品详情、搜索、分类；后台：商品增删改查和分类选项。
"""
from django.conf import settings
from rest_framework.permissions import IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminRole
from core.infrastructure.response import StatusCode
from products.application import (
    ProductApplicationService,
    CreateProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    BulkDeleteProductsCommand,
    GetProductQuery,
    SearchProductsQuery,
    GetCategoryQuery,
)
from products.api.serializers import (
    ProductCreateSerializer,
    ProductUpdateSerializer,
    ProductBulkDeleteSerializer,
)


def get_product_service() -> ProductApplicationService:
    """按当前配置组装商品应用服务"""
    from core.infrastructure.cache import get_cache_service
    from core.infrastructure.transaction import DjangoTransactionManager
    from products.domain.services import ProductService
    from products.infrastructure.factory import ProductInfrastructureFactory

    currency = getattr(settings, 'SHOP_SETTINGS', {}).get('CURRENCY', 'USD')
    factory = ProductInfrastructureFactory(
        cache_service=get_cache_service(),
        transaction_manager=DjangoTransactionManager(),
        currency=currency,
    )
    products = factory.create_product_repository()
    categories = factory.create_category_repository()

    return ProductApplicationService(
        product_service=ProductService(
            product_repository=products,
            category_repository=categories,
            stock_movement_repository=factory.create_stock_movement_repository(),
            review_repository=factory.create_review_repository(),
        ),
        product_repository=products,
        category_repository=categories,
        transaction_manager=factory.transaction_manager,
        cache_manager=factory.create_cache_manager(),
        currency=currency,
    )


class ProductPageMixin:
    """?search=&status=&category=&page=&limit= 分页查询商品"""

    def product_page(self, request, message):
        page, limit = self.get_pagination_params(request)
        params = request.query_params
        result = get_product_service().search_products(SearchProductsQuery(
            keyword=params.get('search', ''),
            status=params.get('status'),
            category=params.get('category'),
            page=page,
            page_size=limit,
        ))
        return self.paginated_response(
            items=[item.to_list_item() for item in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            message=message,
        )


class ProductDetailView(ApiBaseView):

    def get(self, request, product_id):
        product = get_product_service().get_product(GetProductQuery(id=product_id))
        return self.success_response(data=product.to_dict(), message="获取商品详情成功")


class ProductSearchView(ProductPageMixin, ApiBaseView):

    def get(self, request):
        return self.product_page(request, "搜索商品成功")


class CategoryListView(ApiBaseView):

    def get(self, request):
        categories = get_product_service().list_categories()
        return self.success_response(data=[c.to_dict() for c in categories], message="获取分类列表成功")


class CategoryDetailView(ApiBaseView):
    """分类信息和该分类下的全部商品"""

    def get(self, request, slug):
        detail = get_product_service().get_category(GetCategoryQuery(slug=slug))
        return self.success_response(data=detail.to_dict(), message="获取分类成功")


class AdminProductListCreateView(ProductPageMixin, ApiBaseView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        return self.product_page(request, "获取商品列表成功")

    def post(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        fields = dict(serializer.validated_data)
        # 空字符串表示不分类
        fields['category'] = fields.get('category') or None
        product = get_product_service().create_product(CreateProductCommand(**fields))
        return self.created_response(data=product.to_dict(), message="商品已创建")


class AdminProductDetailView(ApiBaseView):
    """
    PUT 时 name、price、stock 必填，未提交的其他字段保持原值；
    category 传空字符串表示移出分类。
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request, product_id):
        product = get_product_service().get_product(GetProductQuery(id=product_id))
        return self.success_response(data=product.to_dict(), message="获取商品详情成功")

    def put(self, request, product_id):
        serializer = ProductUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        product = get_product_service().update_product(
            UpdateProductCommand(id=product_id, **serializer.validated_data)
        )
        return self.success_response(data=product.to_dict(), message="商品已更新", code=StatusCode.UPDATED)

    def delete(self, request, product_id):
        product = get_product_service().delete_product(DeleteProductCommand(id=product_id))
        return self.success_response(message=f'商品"{product.name}"已删除', code=StatusCode.DELETED)


class AdminProductBulkDeleteView(ApiBaseView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request):
        serializer = ProductBulkDeleteSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        deleted = get_product_service().bulk_delete_products(
            BulkDeleteProductsCommand(ids=serializer.validated_data['ids'])
        )
        return self.success_response(data={'deleted': deleted}, message="商品已删除", code=StatusCode.DELETED)


class AdminCategoryListView(ApiBaseView):
    """商品表单的分类下拉选项"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        categories = get_product_service().list_categories()
        return self.success_response(data=[c.to_option() for c in categories])
