"""
账户领域模型包。
提供用户账户、支付卡相关的实体、值对象、仓储接口和领域服务。
"""

from accounts.domain.entities import UserAccount, UserRole, PaymentCard
from accounts.domain.value_objects import CardNumber, CardBrand, ResetToken
from accounts.domain.repositories import (
    UserRepository,
    PaymentCardRepository,
    VisitRepository,
    MailService,
    AvatarStorage,
)
from accounts.domain.services import PasswordResetService, PaymentCardService, parse_avatar_data_url

__all__ = [
    'UserAccount',
    'UserRole',
    'PaymentCard',
    'CardNumber',
    'CardBrand',
    'ResetToken',
    'UserRepository',
    'PaymentCardRepository',
    'VisitRepository',
    'MailService',
    'AvatarStorage',
    'PasswordResetService',
    'PaymentCardService',
    'parse_avatar_data_url',
]
