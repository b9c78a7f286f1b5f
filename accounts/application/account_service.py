"""
账户应用服务。
处理注册、登录校验、重置密码、个人资料、支付卡、访问日志和后台用户管理。
"""
from typing import Any, List, Optional

from django.utils import timezone
from loguru import logger

from core.domain import (
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from core.infrastructure.transaction import TransactionManager
from accounts.domain import (
    UserAccount,
    UserRole,
    ResetToken,
    UserRepository,
    PaymentCardRepository,
    VisitRepository,
    MailService,
    AvatarStorage,
    PasswordResetService,
    PaymentCardService,
    parse_avatar_data_url,
)
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


class AccountApplicationService:
    """
    账户应用服务。
    协调用户仓储、支付卡领域服务和邮件、头像存储等基础设施服务。
    """

    def __init__(
        self,
        user_repository: UserRepository,
        card_repository: PaymentCardRepository,
        visit_repository: VisitRepository,
        mail_service: MailService,
        avatar_storage: AvatarStorage,
        password_reset_service: PasswordResetService,
        card_service: PaymentCardService,
        transaction_manager: TransactionManager,
        frontend_url: str = "http://localhost:3000",
    ):
        """
        初始化账户应用服务。

        Args:
            user_repository: 用户仓储
            card_repository: 支付卡仓储
            visit_repository: 访问日志仓储
            mail_service: 邮件服务
            avatar_storage: 头像存储服务
            password_reset_service: 重置令牌服务
            card_service: 支付卡领域服务
            transaction_manager: 事务管理器
            frontend_url: 前端地址，用于拼接重置链接
        """
        self.user_repository = user_repository
        self.card_repository = card_repository
        self.visit_repository = visit_repository
        self.mail_service = mail_service
        self.avatar_storage = avatar_storage
        self.password_reset_service = password_reset_service
        self.card_service = card_service
        self.transaction_manager = transaction_manager
        self.frontend_url = frontend_url.rstrip("/")

    def _get_user(self, user_id: Any) -> UserAccount:
        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundException("用户", user_id)
        return user

    def _send_mail_quietly(self, subject: str, message: str, recipient: str) -> None:
        """发送通知邮件，发送失败只记录日志"""
        try:
            self.mail_service.send(subject, message, recipient)
        except Exception as e:
            logger.error(f"发送邮件失败: {recipient}, {e}")

    # ==================== 认证 ====================

    def register(self, command: RegisterUserCommand) -> UserDTO:
        """
        注册新用户。

        Args:
            command: 注册用户命令

        Returns:
            新用户DTO

        Raises:
            DuplicateEntityException: 邮箱已被注册
        """
        try:
            with self.transaction_manager.start():
                email = command.email.strip().lower()
                if self.user_repository.get_by_email(email):
                    raise DuplicateEntityException("用户", "该邮箱已被注册")

                user = UserAccount(
                    email=email,
                    fullname=command.name.strip(),
                    role=UserRole.MEMBER,
                    type="manual",
                )
                user = self.user_repository.create(user, command.password)
                logger.info(f"新用户注册: {user.email}")
                return UserDTO.from_entity(user)
        except Exception as e:
            logger.error(f"注册用户失败: {e}")
            raise

    def authenticate(self, email: str, password: str) -> Optional[UserDTO]:
        """
        校验邮箱和密码。

        Returns:
            校验通过返回用户DTO，否则返回None
        """
        user = self.user_repository.get_by_email(email)
        if not user or not self.user_repository.check_password(user.id, password):
            logger.info(f"登录失败: {email}")
            return None
        return UserDTO.from_entity(user)

    def request_password_reset(self, command: RequestPasswordResetCommand) -> None:
        """
        申请重置密码。
        邮箱不存在时静默返回，不暴露邮箱是否已注册。

        Args:
            command: 申请重置密码命令
        """
        try:
            with self.transaction_manager.start():
                user = self.user_repository.get_by_email(command.email)
                if not user:
                    logger.info(f"重置密码申请的邮箱不存在: {command.email}")
                    return
                token = self.password_reset_service.issue(user, timezone.now())
                self.user_repository.save(user)
        except Exception as e:
            logger.error(f"申请重置密码失败: {e}")
            raise

        link = f"{self.frontend_url}/auth/reset-password?token={token.raw}"
        self._send_mail_quietly(
            "重置密码",
            f"您好 {user.fullname or user.email}，\n\n"
            f"请点击以下链接重置密码，链接在 {self.password_reset_service.ttl_hours} 小时内有效：\n{link}\n\n"
            f"如果这不是您本人的操作，请忽略此邮件。",
            user.email,
        )

    def verify_reset_token(self, token: str) -> bool:
        token_hash = ResetToken.hash_of(token)
        user = self.user_repository.get_by_reset_token(token_hash)
        return bool(user and user.has_valid_reset_token(token_hash, timezone.now()))

    def reset_password(self, command: ResetPasswordCommand) -> None:
        """
        使用令牌重置密码，成功后令牌失效并发送确认邮件。

        Raises:
            ValidationException: 令牌无效或已过期
        """
        try:
            with self.transaction_manager.start():
                token_hash = ResetToken.hash_of(command.token)
                user = self.user_repository.get_by_reset_token(token_hash)
                if not user or not user.has_valid_reset_token(token_hash, timezone.now()):
                    raise ValidationException("token", "重置链接无效或已过期")

                self.user_repository.set_password(user.id, command.new_password)
                user.clear_reset_token()
                self.user_repository.save(user)
                logger.info(f"用户已重置密码: {user.email}")
        except Exception as e:
            logger.error(f"重置密码失败: {e}")
            raise

        self._send_mail_quietly(
            "密码已重置",
            f"您好 {user.fullname or user.email}，您的账户密码已成功重置。",
            user.email,
        )

    # ==================== 个人资料 ====================

    def get_profile(self, user_id: Any) -> ProfileDTO:
        return ProfileDTO.from_entity(self._get_user(user_id))

    def _delete_avatar_on_commit(self, image: str) -> None:
        self.transaction_manager.on_commit(lambda: self.avatar_storage.delete(image))

    def update_profile(self, command: UpdateProfileCommand) -> ProfileDTO:
        """
        更新个人资料。
        以 data: 开头的头像会被解码保存，事务提交后删除旧头像文件，
        事务失败时删除新保存的文件。

        Args:
            command: 更新个人资料命令

        Returns:
            更新后的个人资料
        """
        new_image = None
        try:
            with self.transaction_manager.start():
                user = self._get_user(command.user_id)
                user.update_profile(
                    fullname=command.fullname.strip(),
                    phone_number=(command.phone or "").strip(),
                    address=(command.address or "").strip(),
                    bio=(command.bio or "").strip(),
                )

                old_image = None
                if isinstance(command.avatar, str) and command.avatar.startswith("data:"):
                    extension, content = parse_avatar_data_url(command.avatar)
                    old_image = user.image
                    new_image = self.avatar_storage.save(user.id, extension, content)
                    user.image = new_image

                user = self.user_repository.save(user)
                if old_image:
                    self._delete_avatar_on_commit(old_image)
                return ProfileDTO.from_entity(user)
        except Exception as e:
            logger.error(f"更新个人资料失败: {e}")
            if new_image:
                self.avatar_storage.delete(new_image)
            raise

    def remove_avatar(self, user_id: Any) -> None:
        try:
            with self.transaction_manager.start():
                user = self._get_user(user_id)
                if user.image:
                    self._delete_avatar_on_commit(user.image)
                user.image = ""
                self.user_repository.save(user)
        except Exception as e:
            logger.error(f"删除头像失败: {e}")
            raise

    def change_password(self, command: ChangePasswordCommand) -> None:
        """
        修改密码。

        Raises:
            ValidationException: 当前密码不正确
        """
        try:
            with self.transaction_manager.start():
                self._get_user(command.user_id)
                if not self.user_repository.check_password(command.user_id, command.current_password):
                    raise ValidationException("currentPassword", "当前密码不正确")
                self.user_repository.set_password(command.user_id, command.new_password)
        except Exception as e:
            logger.error(f"修改密码失败: {e}")
            raise

    # ==================== 支付卡 ====================

    def list_cards(self, user_id: Any) -> List[PaymentCardDTO]:
        return [PaymentCardDTO(card) for card in self.card_repository.list_for_user(user_id)]

    def add_card(self, command: AddPaymentCardCommand) -> PaymentCardDTO:
        try:
            with self.transaction_manager.start():
                card = self.card_service.add_card(
                    user_id=command.user_id,
                    card_number=command.card_number,
                    cardholder_name=command.cardholder_name,
                    expiry_month=command.expiry_month,
                    expiry_year=command.expiry_year,
                    is_default=command.is_default,
                )
                return PaymentCardDTO(card)
        except Exception as e:
            logger.error(f"添加支付卡失败: {e}")
            raise

    def set_default_card(self, user_id: Any, card_id: Any) -> PaymentCardDTO:
        try:
            with self.transaction_manager.start():
                return PaymentCardDTO(self.card_service.set_default(user_id, card_id))
        except Exception as e:
            logger.error(f"设置默认支付卡失败: {e}")
            raise

    def delete_card(self, user_id: Any, card_id: Any) -> None:
        try:
            with self.transaction_manager.start():
                self.card_service.delete_card(user_id, card_id)
        except Exception as e:
            logger.error(f"删除支付卡失败: {e}")
            raise

    # ==================== 访问日志 ====================

    def log_visit(self, command: LogVisitCommand) -> Any:
        return self.visit_repository.add(
            ip=command.ip,
            user_agent=command.user_agent,
            url=command.url,
            timestamp=command.timestamp or timezone.now(),
            user_id=command.user_id,
        )

    # ==================== 后台用户管理 ====================

    def list_users(self, query: ListUsersQuery) -> UserListDTO:
        filters = {'role': query.role} if query.role else None
        users, total = self.user_repository.search(
            keyword=query.search,
            filters=filters,
            page=query.page,
            page_size=query.page_size,
        )
        return UserListDTO(
            items=[UserDTO.from_entity(user) for user in users],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    def bulk_delete_users(self, command: BulkDeleteUsersCommand) -> int:
        """
        批量删除用户，操作者本人会被跳过。

        Returns:
            实际删除的用户数
        """
        try:
            with self.transaction_manager.start():
                deleted = self.user_repository.delete_many(command.ids, exclude_id=command.operator_id)
                logger.info(f"管理员 {command.operator_id} 删除了 {deleted} 个用户")
                return deleted
        except Exception as e:
            logger.error(f"批量删除用户失败: {e}")
            raise
