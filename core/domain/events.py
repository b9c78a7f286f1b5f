"""
领域事件。
聚合在状态变化时记录事件，仓储在事务提交成功后调用 DomainEvents.publish 分发给订阅者。
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Type

from loguru import logger


class DomainEvent:
    """事件基类，每个事件带唯一ID和UTC发生时间"""

    def __init__(self):
        self.id = uuid.uuid4()
        self.occurred_on = datetime.now(timezone.utc)

    @property
    def name(self) -> str:
        return type(self).__name__


EventHandler = Callable[[DomainEvent], None]


class DomainEvents:
    """
    进程内的事件分发器。
    订阅按事件的具体类型匹配，处理器按注册顺序同步执行，异常向调用方传播。
    """

    _handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    @classmethod
    def register(cls, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        subscribers = cls._handlers.setdefault(event_type, [])
        # 应用重复加载时不重复订阅
        if handler not in subscribers:
            subscribers.append(handler)

    @classmethod
    def publish(cls, event: DomainEvent) -> None:
        subscribers = cls._handlers.get(type(event), [])
        logger.debug(f"发布领域事件 {event.name}，订阅者 {len(subscribers)} 个")
        for handler in subscribers:
            handler(event)


class ProductStockChangedEvent(DomainEvent):
    """
    商品库存变化。

    Attributes:
        reason: 变化原因，order 表示下单扣减，adjustment 表示后台调整
    """

    def __init__(self, product_id: Any, old_stock: int, new_stock: int, reason: str):
        super().__init__()
        self.product_id = product_id
        self.old_stock = old_stock
        self.new_stock = new_stock
        self.reason = reason


class ProductRatingChangedEvent(DomainEvent):
    """新评价提交后商品平均评分变化"""

    def __init__(self, product_id: Any, rating: Any):
        super().__init__()
        self.product_id = product_id
        self.rating = rating


class OrderPlacedEvent(DomainEvent):
    """订单已创建，product_ids 为订单行涉及的商品"""

    def __init__(self, order_id: Any, user_id: Any, total_amount: Any, product_ids: List[Any]):
        super().__init__()
        self.order_id = order_id
        self.user_id = user_id
        self.total_amount = total_amount
        self.product_ids = product_ids


class OrderStatusChangedEvent(DomainEvent):

    def __init__(self, order_id: Any, old_status: str, new_status: str):
        super().__init__()
        self.order_id = order_id
        self.old_status = old_status
        self.new_status = new_status
