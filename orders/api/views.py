"""
订单API视图。
提供促销码、结算报价、下单、订单查询、确认收货、商品评价和后台订单管理接口。
"""

from rest_framework.permissions import IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminRole
from core.infrastructure.response import StatusCode
from orders.application import (
    OrderApplicationService,
    OrderLineInput,
    PaymentInput,
    ApplyPromoCommand,
    CheckoutQuoteCommand,
    PlaceOrderCommand,
    CompleteOrderCommand,
    SubmitReviewCommand,
    UpdateOrderStatusCommand,
    GetOrderQuery,
    ListOrdersQuery,
)
from orders.domain import ShippingAddress
from orders.api.serializers import (
    PromoApplySerializer,
    CheckoutQuoteSerializer,
    OrderCreateSerializer,
    OrderCompleteSerializer,
    ReviewCreateSerializer,
    OrderStatusSerializer,
)


def get_order_service() -> OrderApplicationService:
    """获取订单应用服务实例"""
    from core.infrastructure.cache import get_cache_service
    from core.infrastructure.transaction import DjangoTransactionManager
    from accounts.domain import PaymentCardService
    from accounts.infrastructure.factory import AccountInfrastructureFactory
    from carts.api.views import get_cart_service
    from products.domain import ProductService
    from products.infrastructure.factory import ProductInfrastructureFactory
    from orders.domain import CheckoutPricing, PromoPolicy
    from orders.domain import config
    from orders.infrastructure.factory import OrderInfrastructureFactory

    transaction_manager = DjangoTransactionManager()

    # 创建基础设施工厂
    order_factory = OrderInfrastructureFactory(currency=config.CURRENCY)
    product_factory = ProductInfrastructureFactory(
        cache_service=get_cache_service(),
        transaction_manager=transaction_manager,
        currency=config.CURRENCY,
    )
    account_factory = AccountInfrastructureFactory(transaction_manager=transaction_manager)

    product_repository = product_factory.create_product_repository()
    review_repository = product_factory.create_review_repository()

    # 创建领域服务
    product_service = ProductService(
        product_repository=product_repository,
        category_repository=product_factory.create_category_repository(),
        stock_movement_repository=product_factory.create_stock_movement_repository(),
        review_repository=review_repository,
    )

    return OrderApplicationService(
        order_repository=order_factory.create_order_repository(),
        promo_repository=order_factory.create_promo_repository(),
        product_repository=product_repository,
        product_service=product_service,
        review_repository=review_repository,
        card_service=PaymentCardService(card_repository=account_factory.create_card_repository()),
        cart_service=get_cart_service(),
        pricing=CheckoutPricing(
            free_shipping_threshold=config.FREE_SHIPPING_THRESHOLD,
            shipping_cost=config.SHIPPING_COST,
            tax_rate=config.TAX_RATE,
            currency=config.CURRENCY,
        ),
        promo_policy=PromoPolicy(currency=config.CURRENCY),
        transaction_manager=transaction_manager,
        default_country=config.DEFAULT_COUNTRY,
        default_shipping_method=config.DEFAULT_SHIPPING_METHOD,
    )


def _order_lines(items):
    return [OrderLineInput(product_id=item['productId'], quantity=item['quantity']) for item in items]


# ==================== 结算 ====================

class PromoApplyView(ApiBaseView):
    """促销码试算接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PromoApplySerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        result = get_order_service().apply_promo(ApplyPromoCommand(
            user_id=request.user.pk,
            code=serializer.validated_data['code'],
            subtotal=serializer.validated_data['subtotal'],
        ))
        return self.success_response(data=result.to_dict(), message="促销码可用")


class CheckoutQuoteView(ApiBaseView):
    """结算报价接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutQuoteSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        quote = get_order_service().quote(CheckoutQuoteCommand(
            user_id=request.user.pk,
            items=_order_lines(serializer.validated_data['items']),
            promo_code=serializer.validated_data.get('promoCode'),
        ))
        return self.success_response(data=quote.to_dict(), message="报价成功")


# ==================== 订单 ====================

class OrderCreateView(ApiBaseView):
    """下单接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        shipping = data['shipping']
        payment = data['payment']
        result = get_order_service().place_order(PlaceOrderCommand(
            user_id=request.user.pk,
            items=_order_lines(data['items']),
            shipping=ShippingAddress(
                full_name=shipping['fullName'],
                email=shipping['email'],
                phone=shipping['phone'],
                address=shipping['address'],
                city=shipping['city'],
                state=shipping['state'],
                zip_code=shipping['zipCode'],
                country=shipping['country'],
            ),
            payment=PaymentInput(
                method=payment['method'],
                provider=payment['provider'],
                transaction_id=payment['transactionId'],
                card_number=payment.get('cardNumber') or None,
                card_name=payment.get('cardName') or None,
                expiry_month=payment.get('expiryMonth'),
                expiry_year=payment.get('expiryYear'),
            ),
            promo_code=data.get('promoCode'),
        ))
        return self.created_response(data=result.to_dict(), message="下单成功")


class OrderListView(ApiBaseView):
    """当前用户订单列表接口"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        orders = get_order_service().list_orders(request.user.pk)
        return self.success_response(data=[order.to_dict() for order in orders], message="获取订单成功")


class OrderDetailView(ApiBaseView):
    """当前用户订单详情接口"""
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        order = get_order_service().get_order(GetOrderQuery(user_id=request.user.pk, order_id=order_id))
        return self.success_response(data=order.to_dict(include_payment=True), message="获取订单详情成功")


class OrderCompleteView(ApiBaseView):
    """确认收货接口"""
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        serializer = OrderCompleteSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        order = get_order_service().complete_order(CompleteOrderCommand(
            user_id=request.user.pk,
            order_id=serializer.validated_data['order_id'],
        ))
        return self.success_response(
            data={'success': True, 'order': order.to_dict()},
            message="订单已完成",
            code=StatusCode.UPDATED
        )


class ReviewCreateView(ApiBaseView):
    """商品评价接口"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        review = get_order_service().submit_review(SubmitReviewCommand(
            user_id=request.user.pk,
            order_id=data['order_id'],
            product_id=data['product_id'],
            rating=data['rating'],
            review=data['review'],
        ))
        return self.created_response(data=review.to_dict(), message="评价已提交")


# ==================== 后台 ====================

class AdminOrderListView(ApiBaseView):
    """后台订单列表接口"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        page, limit = self.get_pagination_params(request)
        result = get_order_service().admin_list_orders(ListOrdersQuery(
            page=page,
            page_size=limit,
            status=request.query_params.get('status'),
            search=request.query_params.get('search', ''),
        ))
        return self.paginated_response(
            items=[order.to_dict(include_user=True) for order in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            message="获取订单列表成功"
        )


class AdminOrderStatusView(ApiBaseView):
    """后台修改订单状态接口"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def put(self, request, order_id):
        serializer = OrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        order = get_order_service().update_status(UpdateOrderStatusCommand(
            order_id=order_id,
            status=serializer.validated_data['status'],
        ))
        return self.success_response(
            data=order.to_dict(include_payment=True, include_user=True),
            message="订单状态已更新",
            code=StatusCode.UPDATED
        )
