"""
订单应用服务。
处理促销码试算、结算报价、下单、确认收货、商品评价和后台订单管理。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.utils import timezone
from loguru import logger

from core.domain import (
    Money,
    EntityNotFoundException,
    BusinessRuleViolationException,
    InvalidEntityStateException,
    AuthorizationException,
    DuplicateEntityException,
)
from core.infrastructure.transaction import TransactionManager
from accounts.domain import PaymentCardService, CardNumber, CardBrand
from carts.application import CartApplicationService
from products.domain import (
    Product,
    ProductRepository,
    ProductReview,
    ProductReviewRepository,
    ProductService,
    Rating,
    ReviewText,
)
from orders.domain import (
    Order,
    OrderItem,
    OrderShipping,
    OrderPayment,
    OrderRepository,
    PromoCode,
    PromoCodeRepository,
    PromoRedemption,
    PriceLine,
    CheckoutPricing,
    PromoPolicy,
)
from orders.application.commands import (
    OrderLineInput,
    PaymentInput,
    ApplyPromoCommand,
    CheckoutQuoteCommand,
    PlaceOrderCommand,
    CompleteOrderCommand,
    SubmitReviewCommand,
    UpdateOrderStatusCommand,
)
from orders.application.queries import GetOrderQuery, ListOrdersQuery
from orders.application.dtos import (
    PromoQuoteDTO,
    QuoteLineDTO,
    CheckoutQuoteDTO,
    OrderDTO,
    OrderListDTO,
    OrderPlacedDTO,
    ReviewDTO,
)


class OrderApplicationService:
    """
    订单应用服务。
    下单在一个事务内完成，任何一步失败都不会留下部分数据。
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        promo_repository: PromoCodeRepository,
        product_repository: ProductRepository,
        product_service: ProductService,
        review_repository: ProductReviewRepository,
        card_service: PaymentCardService,
        cart_service: CartApplicationService,
        pricing: CheckoutPricing,
        promo_policy: PromoPolicy,
        transaction_manager: TransactionManager,
        default_country: str = "INDONESIA",
        default_shipping_method: str = "STANDARD",
    ):
        """
        初始化订单应用服务。

        Args:
            order_repository: 订单仓储
            promo_repository: 促销码仓储
            product_repository: 商品仓储
            product_service: 商品领域服务，负责扣减库存和重算评分
            review_repository: 商品评价仓储
            card_service: 支付卡领域服务
            cart_service: 购物车应用服务，下单后清理购物车
            pricing: 结算计价服务
            promo_policy: 促销码规则
            transaction_manager: 事务管理器
            default_country: 收货国家默认值
            default_shipping_method: 配送方式
        """
        self.order_repository = order_repository
        self.promo_repository = promo_repository
        self.product_repository = product_repository
        self.product_service = product_service
        self.review_repository = review_repository
        self.card_service = card_service
        self.cart_service = cart_service
        self.pricing = pricing
        self.promo_policy = promo_policy
        self.transaction_manager = transaction_manager
        self.default_country = default_country
        self.default_shipping_method = default_shipping_method

    # ==================== 计价 ====================

    def _merge_lines(self, items: List[OrderLineInput]) -> Dict[str, int]:
        """合并重复商品，保持提交顺序"""
        quantities: Dict[str, int] = {}
        for item in items:
            key = str(item.product_id)
            quantities[key] = quantities.get(key, 0) + item.quantity
        return quantities

    def _load_products(self, quantities: Dict[str, int], for_update: bool = False) -> Dict[str, Product]:
        """
        读取下单商品。

        Raises:
            EntityNotFoundException: 商品不存在
            BusinessRuleViolationException: 商品已下架
        """
        products = self.product_repository.get_by_ids(list(quantities.keys()), for_update=for_update)
        for product_id in quantities:
            product = products.get(product_id)
            if not product:
                raise EntityNotFoundException("商品", product_id)
            if not product.is_available():
                raise BusinessRuleViolationException("product_unavailable", f"商品\"{product.name}\"已下架")
        return products

    def _price_lines(self, quantities: Dict[str, int], products: Dict[str, Product]) -> List[PriceLine]:
        return [
            PriceLine(products[product_id].id, products[product_id].price, quantity)
            for product_id, quantity in quantities.items()
        ]

    def _get_active_promo(self, code: str) -> PromoCode:
        promo = self.promo_repository.get_active_by_code(code)
        if not promo:
            raise EntityNotFoundException("促销码", code)
        return promo

    def _promo_discount(self, code: Optional[str], user_id: Any, subtotal: Money) -> Tuple[Optional[PromoCode], Money]:
        if not code:
            return None, Money.zero(subtotal.currency)
        promo = self._get_active_promo(code)
        discount = self.promo_policy.apply(
            promo,
            subtotal,
            already_redeemed=self.promo_repository.has_redeemed(promo.id, user_id),
            now=timezone.now(),
        )
        return promo, discount

    def apply_promo(self, command: ApplyPromoCommand) -> PromoQuoteDTO:
        """
        试算促销码优惠，不记录使用。

        Args:
            command: 使用促销码命令

        Returns:
            促销码试算结果

        Raises:
            EntityNotFoundException: 促销码不存在或未启用
            BusinessRuleViolationException: 不满足促销码规则
        """
        subtotal = Money(command.subtotal, self.pricing.currency).quantize()
        promo, discount = self._promo_discount(command.code, command.user_id, subtotal)
        return PromoQuoteDTO(promo, discount, subtotal)

    def quote(self, command: CheckoutQuoteCommand) -> CheckoutQuoteDTO:
        """按当前商品价格计算结算明细"""
        quantities = self._merge_lines(command.items)
        products = self._load_products(quantities)
        lines = self._price_lines(quantities, products)

        subtotal = self.pricing.subtotal(lines)
        promo, discount = self._promo_discount(command.promo_code, command.user_id, subtotal)
        breakdown = self.pricing.calculate(lines, discount)

        return CheckoutQuoteDTO(
            pricing=breakdown,
            items=[
                QuoteLineDTO(line.product_id, products[str(line.product_id)].name, line.unit_price, line.quantity)
                for line in lines
            ],
            promo_code=promo.code if promo else None,
        )

    # ==================== 下单 ====================

    def _resolve_payment_card(self, user_id: Any, payment: PaymentInput) -> Any:
        """有卡号和持卡人时查找或保存支付卡，返回卡ID"""
        if not (payment.card_number and payment.card_name):
            return None
        detected = CardNumber(payment.card_number).brand
        card = self.card_service.find_or_add_card(
            user_id=user_id,
            card_number=payment.card_number,
            cardholder_name=payment.card_name,
            expiry_month=payment.expiry_month,
            expiry_year=payment.expiry_year,
            brand=detected if detected != CardBrand.UNKNOWN else (payment.method or None),
        )
        return card.id

    def place_order(self, command: PlaceOrderCommand) -> OrderPlacedDTO:
        """
        下单。

        在一个事务内：按当前价格和促销码计价，检查库存，创建已支付订单及商品、
        收货信息和支付记录，扣减库存，记录促销码使用，最后从购物车移除已购商品。

        Args:
            command: 下单命令

        Returns:
            订单ID和总额

        Raises:
            EntityNotFoundException: 商品或促销码不存在
            InsufficientStockException: 库存不足
            BusinessRuleViolationException: 商品已下架或促销码不可用
        """
        try:
            with self.transaction_manager.start():
                quantities = self._merge_lines(command.items)
                products = self._load_products(quantities, for_update=True)
                for product_id, quantity in quantities.items():
                    products[product_id].ensure_stock(quantity)

                lines = self._price_lines(quantities, products)
                subtotal = self.pricing.subtotal(lines)
                promo, discount = self._promo_discount(command.promo_code, command.user_id, subtotal)
                breakdown = self.pricing.calculate(lines, discount)

                order = Order.place(
                    user_id=command.user_id,
                    items=[
                        OrderItem(
                            product_id=products[product_id].id,
                            product_name=products[product_id].name,
                            quantity=quantity,
                            price_at_time=products[product_id].price,
                            product_image=products[product_id].image,
                        )
                        for product_id, quantity in quantities.items()
                    ],
                    pricing=breakdown,
                    payment=command.payment.method,
                    promo_code_id=promo.id if promo else None,
                )

                shipping = command.shipping
                order.shipping = OrderShipping(
                    full_name=shipping.full_name,
                    email=shipping.email,
                    phone_number=shipping.phone,
                    home_address=shipping.address,
                    city=shipping.city,
                    state=shipping.state,
                    zip_code=shipping.zip_code,
                    country=shipping.country or self.default_country,
                    shipping_method=self.default_shipping_method,
                    shipping_cost=breakdown.shipping_cost,
                )
                order.payment_record = OrderPayment(
                    payment_method=command.payment.method,
                    payment_provider=command.payment.provider,
                    transaction_id=command.payment.transaction_id,
                    payment_card_id=self._resolve_payment_card(command.user_id, command.payment),
                    paid_at=timezone.now(),
                )
                order = self.order_repository.save(order)

                self.product_service.sell_products(quantities, order_id=order.id)

                if promo:
                    self.promo_repository.add_redemption(PromoRedemption(
                        promo_id=promo.id,
                        user_id=command.user_id,
                        order_id=order.id,
                    ))
                    self.promo_repository.increment_used_count(promo.id)

                self.cart_service.remove_products(command.user_id, list(quantities.keys()))

                logger.info(f"订单已创建: {order.id}，用户: {command.user_id}，总额: {order.total}")
                return OrderPlacedDTO(order)
        except Exception as e:
            logger.error(f"创建订单失败: {e}")
            raise

    # ==================== 用户订单 ====================

    def list_orders(self, user_id: Any) -> List[OrderDTO]:
        return [OrderDTO.from_entity(order) for order in self.order_repository.list_for_user(user_id)]

    def get_order(self, query: GetOrderQuery) -> OrderDTO:
        """
        获取当前用户的订单详情。

        Raises:
            EntityNotFoundException: 订单不存在或不属于当前用户
        """
        order = self.order_repository.get_for_user(query.order_id, query.user_id)
        if not order:
            raise EntityNotFoundException("订单", query.order_id)
        return OrderDTO.from_entity(order)

    def complete_order(self, command: CompleteOrderCommand) -> OrderDTO:
        """
        确认收货。

        Raises:
            EntityNotFoundException: 订单不存在或不属于当前用户
            InvalidEntityStateException: 订单未送达
        """
        try:
            with self.transaction_manager.start():
                order = self.order_repository.get_for_user(command.order_id, command.user_id)
                if not order:
                    raise EntityNotFoundException("订单", command.order_id)
                order.complete()
                order = self.order_repository.save(order)
                logger.info(f"订单已完成: {order.id}")
                return OrderDTO.from_entity(order)
        except Exception as e:
            logger.error(f"确认收货失败: {e}")
            raise

    def submit_review(self, command: SubmitReviewCommand) -> ReviewDTO:
        """
        评价已完成订单中的商品，并重新计算商品评分。

        Raises:
            ValidationException: 评分或评价内容不合法
            EntityNotFoundException: 订单不存在
            AuthorizationException: 订单不属于当前用户
            InvalidEntityStateException: 订单未完成
            BusinessRuleViolationException: 订单中没有该商品
            DuplicateEntityException: 已经评价过
        """
        rating = Rating(command.rating)
        text = ReviewText(command.review)

        try:
            with self.transaction_manager.start():
                order = self.order_repository.get_by_id(command.order_id)
                if not order:
                    raise EntityNotFoundException("订单", command.order_id)
                if str(order.user_id) != str(command.user_id):
                    raise AuthorizationException(command.user_id, "评价商品", f"订单 {command.order_id}")
                if not order.is_completed():
                    raise InvalidEntityStateException("订单", "订单尚未完成，不能评价")
                if not order.contains_product(command.product_id):
                    raise BusinessRuleViolationException("product_not_in_order", "订单中没有该商品")
                if self.review_repository.exists(command.user_id, order.id, command.product_id):
                    raise DuplicateEntityException("商品评价", "该商品已经评价过")

                review = self.review_repository.add(ProductReview(
                    user_id=command.user_id,
                    order_id=order.id,
                    product_id=command.product_id,
                    rating=rating.value,
                    review=text.text,
                ))
                self.product_service.recalculate_rating(command.product_id)
                return ReviewDTO(review)
        except Exception as e:
            logger.error(f"提交评价失败: {e}")
            raise

    # ==================== 后台 ====================

    def admin_list_orders(self, query: ListOrdersQuery) -> OrderListDTO:
        filters = {'status': query.status} if query.status else {}
        orders, total = self.order_repository.search(
            keyword=query.search,
            filters=filters,
            page=query.page,
            page_size=query.page_size,
        )
        return OrderListDTO(
            items=[OrderDTO.from_entity(order) for order in orders],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    def update_status(self, command: UpdateOrderStatusCommand) -> OrderDTO:
        """
        后台修改订单状态。

        Raises:
            EntityNotFoundException: 订单不存在
            ValidationException: 状态不合法
        """
        try:
            with self.transaction_manager.start():
                order = self.order_repository.get_by_id(command.order_id)
                if not order:
                    raise EntityNotFoundException("订单", command.order_id)
                order.change_status(command.status)
                order = self.order_repository.save(order)
                logger.info(f"订单状态已更新: {order.id} -> {order.status}")
                return OrderDTO.from_entity(order)
        except Exception as e:
            logger.error(f"更新订单状态失败: {e}")
            raise
