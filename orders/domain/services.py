"""
订单领域服务。
包含结算计价和促销码校验两个无状态服务，所有金额计算都集中在这里。
"""
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from core.domain import Money, BusinessRuleViolationException
from orders.domain.entities import PromoCode
from orders.domain.value_objects import DiscountType, PriceLine, PricingBreakdown


class CheckoutPricing:
    """
    结算计价服务。

    - 小计为各行单价乘以数量之和
    - 小计超过免运费门槛时运费为0，否则为固定运费
    - 税费按 max(小计 - 优惠, 0) 计算
    - 总额 = 应税金额 + 运费 + 税费
    """

    def __init__(
        self,
        free_shipping_threshold: Decimal,
        shipping_cost: Decimal,
        tax_rate: Decimal,
        currency: str = "USD"
    ):
        """
        初始化结算计价服务。

        Args:
            free_shipping_threshold: 免运费门槛
            shipping_cost: 固定运费
            tax_rate: 税率，例如 0.10
            currency: 货币
        """
        self.free_shipping_threshold = Decimal(str(free_shipping_threshold))
        self.shipping_cost = Decimal(str(shipping_cost))
        self.tax_rate = Decimal(str(tax_rate))
        self.currency = currency

    def subtotal(self, lines: Iterable[PriceLine]) -> Money:
        total = Money.zero(self.currency)
        for line in lines:
            total = total + line.line_total
        return total.quantize()

    def shipping_for(self, subtotal: Money) -> Money:
        if subtotal.amount > self.free_shipping_threshold:
            return Money.zero(self.currency)
        return Money(self.shipping_cost, self.currency).quantize()

    def calculate(self, lines: Iterable[PriceLine], discount: Optional[Money] = None) -> PricingBreakdown:
        """
        计算价格明细。

        Args:
            lines: 计价行
            discount: 优惠金额

        Returns:
            价格明细
        """
        subtotal = self.subtotal(lines)
        discount = (discount or Money.zero(self.currency)).quantize()
        shipping = self.shipping_for(subtotal)
        taxable = (subtotal - discount).non_negative()
        tax = (taxable * self.tax_rate).quantize()
        total = (taxable + shipping + tax).quantize()
        return PricingBreakdown(
            subtotal=subtotal,
            discount=discount,
            shipping_cost=shipping,
            tax=tax,
            total=total,
        )


class PromoPolicy:
    """
    促销码规则。
    按启用、开始时间、过期时间、最低消费、使用上限、用户是否已使用的顺序校验，
    第一条不满足的规则决定错误消息。
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    def validate(self, promo: PromoCode, subtotal: Money, already_redeemed: bool, now: datetime) -> None:
        """
        校验促销码是否可用于当前订单。

        Args:
            promo: 促销码
            subtotal: 商品小计
            already_redeemed: 当前用户是否已经使用过
            now: 当前时间

        Raises:
            BusinessRuleViolationException: 违反任意一条规则
        """
        if not promo.is_active:
            raise BusinessRuleViolationException("promo_inactive", "促销码未启用")
        if promo.start_at and promo.start_at > now:
            raise BusinessRuleViolationException("promo_not_started", "促销码尚未开始")
        if promo.expires_at and promo.expires_at < now:
            raise BusinessRuleViolationException("promo_expired", "促销码已过期")
        if subtotal.amount < promo.min_order_amount:
            raise BusinessRuleViolationException(
                "promo_min_order",
                f"订单金额需满{promo.min_order_amount:.2f}才能使用该促销码"
            )
        if promo.usage_limit and promo.used_count >= promo.usage_limit:
            raise BusinessRuleViolationException("promo_usage_limit", "促销码使用次数已达上限")
        if already_redeemed:
            raise BusinessRuleViolationException("promo_already_redeemed", "您已经使用过该促销码")

    def discount_for(self, promo: PromoCode, subtotal: Money) -> Money:
        """
        计算优惠金额，先按最高优惠封顶，再不超过小计。

        Returns:
            按分四舍五入后的优惠金额
        """
        if promo.discount_type == DiscountType.PERCENTAGE:
            discount = subtotal * (promo.discount_value / Decimal(100))
        else:
            discount = Money(promo.discount_value, subtotal.currency)

        if promo.max_discount:
            discount = discount.min(Money(promo.max_discount, subtotal.currency))
        discount = discount.min(subtotal).non_negative()
        return discount.quantize()

    def apply(self, promo: PromoCode, subtotal: Money, already_redeemed: bool, now: datetime) -> Money:
        self.validate(promo, subtotal, already_redeemed, now)
        return self.discount_for(promo, subtotal)
