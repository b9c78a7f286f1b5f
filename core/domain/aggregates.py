"""
聚合根基类。
"""
from typing import Any, List

from core.domain.base import Entity
from core.domain.events import DomainEvent, DomainEvents


class AggregateRoot(Entity):
    """
    聚合根。
    业务方法通过 add_domain_event 记录事件；仓储保存成功后调用 publish_domain_events。
    """

    def __init__(self, id: Any = None):
        super().__init__(id)
        self._pending_events: List[DomainEvent] = []

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._pending_events)

    def add_domain_event(self, event: DomainEvent) -> None:
        self._pending_events.append(event)

    def clear_domain_events(self) -> List[DomainEvent]:
        """取出并清空待发布事件"""
        events, self._pending_events = self._pending_events, []
        return events

    def publish_domain_events(self) -> None:
        for event in self.clear_domain_events():
            DomainEvents.publish(event)
