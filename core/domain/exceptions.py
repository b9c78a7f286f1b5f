"""
领域异常模块。
领域层和应用层通过这些异常表达业务失败，统一异常处理器把它们映射为API响应。
异常的 details() 返回附加到响应 data 中的结构化信息。
"""
from typing import Any, Dict, Optional


class DomainException(Exception):
    """领域异常基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> Optional[Dict[str, Any]]:
        return None


class InvalidEntityStateException(DomainException):
    """
    实体当前状态不允许该操作，例如订单未送达时确认收货、未完成的订单提交评价。
    """

    def __init__(self, entity_name: str, reason: str):
        super().__init__(reason)
        self.entity_name = entity_name
        self.reason = reason


class EntityNotFoundException(DomainException):
    """
    实体不存在。
    访问不属于当前用户的订单、购物车项或支付卡时同样抛出，不暴露资源是否存在。
    """

    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(f"{entity_name}不存在: {entity_id}")
        self.entity_name = entity_name
        self.entity_id = entity_id


class BusinessRuleViolationException(DomainException):
    """
    违反业务规则。
    rule_name 是规则的稳定标识，例如 promo_expired、product_unavailable；
    message 直接返回给调用方。
    """

    def __init__(self, rule_name: str, message: str):
        super().__init__(message)
        self.rule_name = rule_name

    def details(self) -> Optional[Dict[str, Any]]:
        return {'rule': self.rule_name}


class InsufficientStockException(DomainException):
    """加购或下单数量超过商品库存"""

    def __init__(self, product_id: Any, requested: int, available: int):
        super().__init__(f"库存不足：需要{requested}件，仅剩{available}件")
        self.product_id = product_id
        self.requested = requested
        self.available = available

    def details(self) -> Optional[Dict[str, Any]]:
        return {
            'productId': str(self.product_id),
            'requested': self.requested,
            'available': self.available,
        }


class ValidationException(DomainException):
    """领域对象拒绝不合法的值，例如评分超出范围、卡号不是数字"""

    def __init__(self, field_name: Optional[str] = None, message: str = "数据验证失败"):
        super().__init__(message)
        self.field_name = field_name

    def details(self) -> Optional[Dict[str, Any]]:
        if not self.field_name:
            return None
        return {self.field_name: [self.message]}


class AuthorizationException(DomainException):
    """用户对资源没有操作权限"""

    def __init__(self, user_id: Any, operation: str, resource: Optional[str] = None):
        target = f"（{resource}）" if resource else ""
        super().__init__(f"无权{operation}{target}")
        self.user_id = user_id
        self.operation = operation
        self.resource = resource


class DuplicateEntityException(DomainException):
    """违反唯一性约束：重复注册、重复收藏、重复评价"""

    def __init__(self, entity_name: str, message: Optional[str] = None):
        super().__init__(message or f"{entity_name}已存在")
        self.entity_name = entity_name
