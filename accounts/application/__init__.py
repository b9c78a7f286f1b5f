"""
账户应用服务层。
"""

from accounts.application.account_service import AccountApplicationService
from accounts.application.commands import (
    RegisterUserCommand,
    RequestPasswordResetCommand,
    ResetPasswordCommand,
    ChangePasswordCommand,
    UpdateProfileCommand,
    AddPaymentCardCommand,
    LogVisitCommand,
    BulkDeleteUsersCommand,
)
from accounts.application.queries import ListUsersQuery
from accounts.application.dtos import UserDTO, ProfileDTO, PaymentCardDTO, UserListDTO

__all__ = [
    'AccountApplicationService',
    'RegisterUserCommand',
    'RequestPasswordResetCommand',
    'ResetPasswordCommand',
    'ChangePasswordCommand',
    'UpdateProfileCommand',
    'AddPaymentCardCommand',
    'LogVisitCommand',
    'BulkDeleteUsersCommand',
    'ListUsersQuery',
    'UserDTO',
    'ProfileDTO',
    'PaymentCardDTO',
    'UserListDTO',
]
