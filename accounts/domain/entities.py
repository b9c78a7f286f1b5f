"""
账户领域模型中的实体。
包含用户账户和支付卡实体。
"""
from datetime import datetime
from typing import Any, Optional

from core.domain import Entity


class UserRole:
    """用户角色枚举"""
    ADMIN = "admin"
    MEMBER = "member"

    ALL = (ADMIN, MEMBER)


class UserAccount(Entity):
    """
    用户账户实体。
    不包含密码，密码的哈希与校验由仓储实现负责。
    """

    def __init__(
        self,
        id: Any = None,
        email: str = "",
        fullname: str = "",
        role: str = UserRole.MEMBER,
        type: str = "manual",
        image: str = "",
        phone_number: str = "",
        address: str = "",
        bio: str = "",
        reset_token: Optional[str] = None,
        reset_token_expires: Optional[datetime] = None,
        date_joined: Optional[datetime] = None,
    ):
        """
        初始化用户账户实体。

        Args:
            id: 用户ID
            email: 登录邮箱
            fullname: 姓名
            role: 角色，admin 或 member
            type: 注册来源
            image: 头像地址
            phone_number: 电话
            address: 地址
            bio: 个人简介
            reset_token: 重置密码令牌的sha256摘要
            reset_token_expires: 重置令牌过期时间
            date_joined: 注册时间
        """
        super().__init__(id)
        self.email = email
        self.fullname = fullname
        self.role = role
        self.type = type
        self.image = image
        self.phone_number = phone_number
        self.address = address
        self.bio = bio
        self.reset_token = reset_token
        self.reset_token_expires = reset_token_expires
        self.date_joined = date_joined

    def update_profile(
        self,
        fullname: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> None:
        """更新个人资料，None 表示不修改"""
        if fullname is not None:
            self.fullname = fullname
        if phone_number is not None:
            self.phone_number = phone_number
        if address is not None:
            self.address = address
        if bio is not None:
            self.bio = bio

    def issue_reset_token(self, token_hash: str, expires_at: datetime) -> None:
        self.reset_token = token_hash
        self.reset_token_expires = expires_at

    def clear_reset_token(self) -> None:
        self.reset_token = None
        self.reset_token_expires = None

    def has_valid_reset_token(self, token_hash: str, now: datetime) -> bool:
        """
        检查重置令牌是否匹配且未过期。

        Args:
            token_hash: 待校验令牌的sha256摘要
            now: 当前时间

        Returns:
            令牌有效返回True
        """
        return (
            self.reset_token is not None
            and self.reset_token == token_hash
            and self.reset_token_expires is not None
            and self.reset_token_expires > now
        )


class PaymentCard(Entity):
    """
    支付卡实体。
    只保存卡号后四位和卡号指纹，不保存完整卡号。
    """

    def __init__(
        self,
        id: Any = None,
        user_id: Any = None,
        card_brand: str = "",
        cardholder_name: str = "",
        last4: str = "",
        fingerprint: str = "",
        expiry_month: Optional[int] = None,
        expiry_year: Optional[int] = None,
        is_default: bool = False,
        created_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.user_id = user_id
        self.card_brand = card_brand
        self.cardholder_name = cardholder_name
        self.last4 = last4
        self.fingerprint = fingerprint
        self.expiry_month = expiry_month
        self.expiry_year = expiry_year
        self.is_default = is_default
        self.created_at = created_at or datetime.now()
