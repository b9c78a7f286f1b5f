"""
领域层公共构件：实体和聚合根基类、值对象、领域事件、领域异常和仓储抽象。
"""
from core.domain.base import Entity
from core.domain.value_objects import ValueObject, Money
from core.domain.aggregates import AggregateRoot
from core.domain.events import (
    DomainEvent,
    DomainEvents,
    ProductStockChangedEvent,
    ProductRatingChangedEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from core.domain.exceptions import (
    DomainException,
    InvalidEntityStateException,
    EntityNotFoundException,
    BusinessRuleViolationException,
    InsufficientStockException,
    ValidationException,
    AuthorizationException,
    DuplicateEntityException,
)
from core.domain.repositories import Repository, SearchableRepository

__all__ = [
    'Entity',
    'ValueObject',
    'Money',
    'AggregateRoot',
    'DomainEvent',
    'DomainEvents',
    'ProductStockChangedEvent',
    'ProductRatingChangedEvent',
    'OrderPlacedEvent',
    'OrderStatusChangedEvent',
    'DomainException',
    'InvalidEntityStateException',
    'EntityNotFoundException',
    'BusinessRuleViolationException',
    'InsufficientStockException',
    'ValidationException',
    'AuthorizationException',
    'DuplicateEntityException',
    'Repository',
    'SearchableRepository',
]
