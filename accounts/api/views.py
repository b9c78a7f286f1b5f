"""
账户API视图。
提供认证、个人设置、支付卡、访问日志和后台用户管理接口。
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model, login, logout
from rest_framework import status
from rest_framework.permissions import IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminRole
from core.infrastructure.response import StatusCode
from accounts.application import (
    AccountApplicationService,
    RegisterUserCommand,
    RequestPasswordResetCommand,
    ResetPasswordCommand,
    ChangePasswordCommand,
    UpdateProfileCommand,
    AddPaymentCardCommand,
    LogVisitCommand,
    BulkDeleteUsersCommand,
    ListUsersQuery,
)
from accounts.api.serializers import (
    RegisterSerializer,
    LoginSerializer,
    ForgotPasswordSerializer,
    ResetPasswordSerializer,
    ChangePasswordSerializer,
    ProfileUpdateSerializer,
    PaymentCardCreateSerializer,
    PaymentCardDefaultSerializer,
    VisitLogSerializer,
    BulkDeleteSerializer,
)

logger = logging.getLogger(__name__)


def get_account_service() -> AccountApplicationService:
    """获取账户应用服务实例"""
    from core.infrastructure.transaction import DjangoTransactionManager
    from accounts.domain import PasswordResetService, PaymentCardService
    from accounts.infrastructure.factory import AccountInfrastructureFactory

    account_settings = getattr(settings, 'ACCOUNT_SETTINGS', {})
    transaction_manager = DjangoTransactionManager()

    factory = AccountInfrastructureFactory(
        transaction_manager=transaction_manager,
        avatar_upload_dir=account_settings.get('AVATAR_UPLOAD_DIR', 'uploads/avatars/'),
    )
    card_repository = factory.create_card_repository()

    return AccountApplicationService(
        user_repository=factory.create_user_repository(),
        card_repository=card_repository,
        visit_repository=factory.create_visit_repository(),
        mail_service=factory.create_mail_service(),
        avatar_storage=factory.create_avatar_storage(),
        password_reset_service=PasswordResetService(
            ttl_hours=account_settings.get('PASSWORD_RESET_TTL_HOURS', 24)
        ),
        card_service=PaymentCardService(card_repository=card_repository),
        transaction_manager=transaction_manager,
        frontend_url=account_settings.get('FRONTEND_URL', 'http://localhost:3000'),
    )


def get_client_ip(request):
    """从 X-Forwarded-For 或 REMOTE_ADDR 获取客户端IP"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


# ==================== 认证 ====================

class RegisterView(ApiBaseView):
    """注册接口"""

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        user = get_account_service().register(RegisterUserCommand(
            name=data['name'],
            email=data['email'],
            password=data['password'],
        ))
        return self.created_response(
            data={'id': user.id, 'email': user.email, 'fullname': user.fullname},
            message="注册成功"
        )


class LoginView(ApiBaseView):
    """登录接口，使用Django会话"""

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        user = get_account_service().authenticate(data['email'], data['password'])
        if not user:
            return self.failed_response(
                message="邮箱或密码错误",
                code=StatusCode.LOGIN_FAILED,
                http_code=status.HTTP_401_UNAUTHORIZED
            )

        login(request, get_user_model().objects.get(pk=user.id))
        return self.success_response(
            data={'id': user.id, 'email': user.email, 'fullname': user.fullname, 'role': user.role},
            message="登录成功"
        )


class LogoutView(ApiBaseView):
    """退出登录接口"""

    def post(self, request):
        logout(request)
        return self.success_response(message="已退出登录")


class ForgotPasswordView(ApiBaseView):
    """申请重置密码接口，无论邮箱是否存在都返回成功"""

    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        get_account_service().request_password_reset(
            RequestPasswordResetCommand(email=serializer.validated_data['email'])
        )
        return self.success_response(message="如果该邮箱已注册，重置链接已发送")


class VerifyResetTokenView(ApiBaseView):
    """校验重置令牌接口"""

    def get(self, request):
        token = request.query_params.get('token')
        if not token:
            return self.failed_response(
                message="缺少token参数",
                code=StatusCode.MISSING_PARAM
            )
        valid = get_account_service().verify_reset_token(token)
        return self.success_response(data={'valid': valid})


class ResetPasswordView(ApiBaseView):
    """重置密码接口"""

    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        get_account_service().reset_password(ResetPasswordCommand(
            token=data['token'],
            new_password=data['newPassword'],
        ))
        return self.success_response(message="密码已重置")


# ==================== 个人设置 ====================

class ProfileView(ApiBaseView):
    """获取个人资料接口"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        profile = get_account_service().get_profile(request.user.pk)
        return self.success_response(data=profile.to_dict())


class ProfileUpdateView(ApiBaseView):
    """更新个人资料和删除头像接口"""
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        profile = get_account_service().update_profile(UpdateProfileCommand(
            user_id=request.user.pk,
            fullname=data['fullName'],
            phone=data.get('phone'),
            address=data.get('address'),
            bio=data.get('bio'),
            avatar=data.get('avatar'),
        ))
        return self.success_response(
            data={'message': "个人资料已更新", 'user': profile.to_dict()},
            message="个人资料已更新",
            code=StatusCode.UPDATED
        )

    def delete(self, request):
        get_account_service().remove_avatar(request.user.pk)
        return self.success_response(message="头像已删除", code=StatusCode.DELETED)


class ChangePasswordView(ApiBaseView):
    """修改密码接口"""
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        get_account_service().change_password(ChangePasswordCommand(
            user_id=request.user.pk,
            current_password=data['currentPassword'],
            new_password=data['newPassword'],
        ))
        return self.success_response(message="密码已修改", code=StatusCode.UPDATED)


class PaymentCardView(ApiBaseView):
    """支付卡列表、添加、设为默认和删除接口"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        cards = get_account_service().list_cards(request.user.pk)
        return self.success_response(data=[card.to_dict() for card in cards])

    def post(self, request):
        serializer = PaymentCardCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        card = get_account_service().add_card(AddPaymentCardCommand(
            user_id=request.user.pk,
            card_number=data['card_number'],
            cardholder_name=data['cardholder_name'],
            expiry_month=data.get('expiry_month'),
            expiry_year=data.get('expiry_year'),
            is_default=data.get('is_default', False),
        ))
        return self.created_response(data=card.to_dict(), message="支付卡已添加")

    def patch(self, request):
        serializer = PaymentCardDefaultSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        card = get_account_service().set_default_card(request.user.pk, serializer.validated_data['card_id'])
        return self.success_response(data=card.to_dict(), message="默认支付卡已更新", code=StatusCode.UPDATED)

    def delete(self, request):
        serializer = PaymentCardDefaultSerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.invalid_response(serializer, message="缺少或无效的card_id参数")

        get_account_service().delete_card(request.user.pk, serializer.validated_data['card_id'])
        return self.success_response(message="支付卡已删除", code=StatusCode.DELETED)


class UserVisitView(ApiBaseView):
    """访问日志接口，允许匿名访问"""

    def post(self, request):
        serializer = VisitLogSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        data = serializer.validated_data
        user_id = request.user.pk if request.user.is_authenticated else None
        visit_id = get_account_service().log_visit(LogVisitCommand(
            ip=data.get('ip') or get_client_ip(request),
            user_agent=data.get('userAgent') or request.META.get('HTTP_USER_AGENT', ''),
            url=data.get('url') or '',
            timestamp=data.get('timestamp'),
            user_id=user_id,
        ))
        return self.created_response(data={'id': visit_id}, message="访问已记录")


# ==================== 后台用户管理 ====================

class AdminUserListView(ApiBaseView):
    """后台用户列表接口"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        page, limit = self.get_pagination_params(request)
        result = get_account_service().list_users(ListUsersQuery(
            page=page,
            page_size=limit,
            search=request.query_params.get('search', ''),
            role=request.query_params.get('role'),
        ))
        return self.paginated_response(
            items=[user.to_dict() for user in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            message="获取用户列表成功"
        )


class AdminUserBulkDeleteView(ApiBaseView):
    """后台批量删除用户接口"""
    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request):
        serializer = BulkDeleteSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid_response(serializer)

        deleted = get_account_service().bulk_delete_users(BulkDeleteUsersCommand(
            ids=serializer.validated_data['ids'],
            operator_id=request.user.pk,
        ))
        logger.info(f"批量删除用户: {deleted}")
        return self.success_response(data={'deleted': deleted}, message="用户已删除", code=StatusCode.DELETED)
