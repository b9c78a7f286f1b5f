"""
账户基础设施层工厂。
负责创建账户领域的仓储和外部服务实例。
"""
from core.infrastructure.transaction import TransactionManager

from accounts.domain import (
    UserRepository,
    PaymentCardRepository,
    VisitRepository,
    MailService,
    AvatarStorage,
)
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from accounts.infrastructure.repositories.django_card_repository import (
    DjangoPaymentCardRepository,
    DjangoVisitRepository,
)
from accounts.infrastructure.services.mail_service import DjangoMailService
from accounts.infrastructure.services.avatar_storage import DjangoAvatarStorage


class AccountInfrastructureFactory:
    """
    账户基础设施层工厂类。
    同一个工厂实例内的仓储和服务只创建一次。
    """

    def __init__(self, transaction_manager: TransactionManager, avatar_upload_dir: str = 'uploads/avatars/'):
        """
        初始化账户基础设施层工厂。

        Args:
            transaction_manager: 事务管理器
            avatar_upload_dir: 头像保存目录
        """
        self.transaction_manager = transaction_manager
        self.avatar_upload_dir = avatar_upload_dir

        self._user_repository = None
        self._card_repository = None
        self._visit_repository = None
        self._mail_service = None
        self._avatar_storage = None

    def create_user_repository(self) -> UserRepository:
        if not self._user_repository:
            self._user_repository = DjangoUserRepository()
        return self._user_repository

    def create_card_repository(self) -> PaymentCardRepository:
        if not self._card_repository:
            self._card_repository = DjangoPaymentCardRepository()
        return self._card_repository

    def create_visit_repository(self) -> VisitRepository:
        if not self._visit_repository:
            self._visit_repository = DjangoVisitRepository()
        return self._visit_repository

    def create_mail_service(self) -> MailService:
        if not self._mail_service:
            self._mail_service = DjangoMailService()
        return self._mail_service

    def create_avatar_storage(self) -> AvatarStorage:
        if not self._avatar_storage:
            self._avatar_storage = DjangoAvatarStorage(upload_dir=self.avatar_upload_dir)
        return self._avatar_storage
