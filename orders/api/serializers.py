"""
订单API序列化器。
负责结算、下单、评价和后台改状态请求数据的验证。
"""
from rest_framework import serializers

from orders.domain import OrderStatus
from products.domain import RATING_MIN, RATING_MAX, REVIEW_MAX_LENGTH


class PromoApplySerializer(serializers.Serializer):
    """使用促销码请求序列化器"""
    code = serializers.CharField(max_length=50)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class OrderLineSerializer(serializers.Serializer):
    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CheckoutQuoteSerializer(serializers.Serializer):
    """结算报价请求序列化器"""
    items = OrderLineSerializer(many=True, allow_empty=False)
    promoCode = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class ShippingSerializer(serializers.Serializer):
    """收货信息"""
    fullName = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    zipCode = serializers.CharField(max_length=20)


class PaymentSerializer(serializers.Serializer):
    """支付信息，卡号只用于识别和保存支付卡"""
    method = serializers.CharField(max_length=50)
    provider = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    transactionId = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    last4 = serializers.CharField(max_length=4, required=False, allow_blank=True)
    cardNumber = serializers.CharField(max_length=30, required=False, allow_blank=True)
    cardName = serializers.CharField(max_length=100, required=False, allow_blank=True)
    expiryMonth = serializers.IntegerField(min_value=1, max_value=12, required=False, allow_null=True)
    expiryYear = serializers.IntegerField(min_value=2000, max_value=2100, required=False, allow_null=True)


class OrderCreateSerializer(CheckoutQuoteSerializer):
    """下单请求序列化器"""
    shipping = ShippingSerializer()
    payment = PaymentSerializer()


class OrderCompleteSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()


class ReviewCreateSerializer(serializers.Serializer):
    """商品评价请求序列化器"""
    order_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=RATING_MIN, max_value=RATING_MAX)
    review = serializers.CharField(max_length=REVIEW_MAX_LENGTH, required=False, allow_blank=True, default="")


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.ALL)
