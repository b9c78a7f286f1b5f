"""
基于Django ORM的用户仓储实现。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from accounts.domain import UserRepository, UserAccount
from accounts.infrastructure.models.account_models import User as UserModel


class DjangoUserRepository(UserRepository):
    """
    基于Django ORM的用户仓储实现。
    密码哈希使用Django配置的 PASSWORD_HASHERS。
    """

    def get_by_id(self, id: Any) -> Optional[UserAccount]:
        try:
            return self._to_domain_entity(UserModel.objects.get(id=id))
        except (UserModel.DoesNotExist, ValueError, TypeError):
            return None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        model = UserModel.objects.filter(email__iexact=(email or "").strip()).first()
        return self._to_domain_entity(model) if model else None

    def get_by_reset_token(self, token_hash: str) -> Optional[UserAccount]:
        model = UserModel.objects.filter(reset_token=token_hash).first()
        return self._to_domain_entity(model) if model else None

    def create(self, user: UserAccount, raw_password: str) -> UserAccount:
        model = UserModel.objects.create_user(
            email=user.email,
            password=raw_password,
            id=user.id,
            fullname=user.fullname,
            role=user.role,
            type=user.type,
        )
        return self._to_domain_entity(model)

    def save(self, user: UserAccount) -> UserAccount:
        """
        保存用户资料字段，不修改密码。

        Args:
            user: 用户实体

        Returns:
            保存后的用户
        """
        with transaction.atomic():
            model = UserModel.objects.select_for_update().get(id=user.id)
            model.fullname = user.fullname
            model.role = user.role
            model.image = user.image
            model.phone_number = user.phone_number
            model.address = user.address
            model.bio = user.bio
            model.reset_token = user.reset_token
            model.reset_token_expires = user.reset_token_expires
            model.save()
            return self._to_domain_entity(model)

    def set_password(self, user_id: Any, raw_password: str) -> None:
        model = UserModel.objects.get(id=user_id)
        model.set_password(raw_password)
        model.save(update_fields=['password'])

    def check_password(self, user_id: Any, raw_password: str) -> bool:
        model = UserModel.objects.filter(id=user_id).first()
        return bool(model and model.check_password(raw_password))

    def search(
        self,
        keyword: str = "",
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[UserAccount], int]:
        queryset = UserModel.objects.all()
        if keyword:
            queryset = queryset.filter(email__icontains=keyword)
        role = (filters or {}).get('role')
        if role:
            queryset = queryset.filter(role=role)

        total = queryset.count()
        offset = (page - 1) * page_size
        models = queryset.order_by('-date_joined')[offset:offset + page_size]
        return [self._to_domain_entity(model) for model in models], total

    def delete_many(self, ids: List[Any], exclude_id: Any = None) -> int:
        queryset = UserModel.objects.filter(id__in=ids)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        deleted = queryset.count()
        queryset.delete()
        return deleted

    def _to_domain_entity(self, model: UserModel) -> UserAccount:
        return UserAccount(
            id=model.id,
            email=model.email,
            fullname=model.fullname,
            role=model.role,
            type=model.type,
            image=model.image,
            phone_number=model.phone_number,
            address=model.address,
            bio=model.bio,
            reset_token=model.reset_token,
            reset_token_expires=model.reset_token_expires,
            date_joined=model.date_joined,
        )
