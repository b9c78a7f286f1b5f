"""
账户领域服务。
处理支付卡默认标记、重置令牌签发和头像数据解析等跨实体规则。
"""
import base64
import binascii
import re
from datetime import datetime, timedelta
from typing import Any, Optional, Tuple

from core.domain import ValidationException, EntityNotFoundException
from accounts.domain.entities import PaymentCard, UserAccount
from accounts.domain.repositories import PaymentCardRepository
from accounts.domain.value_objects import CardNumber, ResetToken


AVATAR_DATA_URL = re.compile(r"^data:image/(?P<ext>png|jpe?g|gif|webp);base64,(?P<data>.+)$", re.DOTALL)
MAX_AVATAR_BYTES = 2 * 1024 * 1024


def parse_avatar_data_url(value: str) -> Tuple[str, bytes]:
    """
    解析 data:image/<ext>;base64,... 格式的头像数据。

    Args:
        value: data URL 字符串

    Returns:
        (扩展名, 图片字节) 元组

    Raises:
        ValidationException: 格式不正确、解码失败或图片过大
    """
    match = AVATAR_DATA_URL.match(value or "")
    if not match:
        raise ValidationException("avatar", "头像必须是 base64 编码的图片")
    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationException("avatar", "头像数据无法解码")
    if not content:
        raise ValidationException("avatar", "头像数据为空")
    if len(content) > MAX_AVATAR_BYTES:
        raise ValidationException("avatar", "头像不能超过2MB")
    ext = match.group("ext")
    return ("jpg" if ext == "jpeg" else ext), content


class PasswordResetService:
    """
    重置密码令牌服务。
    """

    def __init__(self, ttl_hours: int = 24):
        self.ttl_hours = ttl_hours

    def issue(self, user: UserAccount, now: datetime) -> ResetToken:
        """
        为用户签发新令牌，旧令牌随之失效。

        Args:
            user: 用户
            now: 当前时间

        Returns:
            新令牌，明文只在此处可见
        """
        token = ResetToken.generate()
        user.issue_reset_token(token.hashed, now + timedelta(hours=self.ttl_hours))
        return token


class PaymentCardService:
    """
    支付卡领域服务。
    保证每个用户最多一张默认卡。
    """

    def __init__(self, card_repository: PaymentCardRepository):
        self.card_repository = card_repository

    def add_card(
        self,
        user_id: Any,
        card_number: str,
        cardholder_name: str,
        expiry_month: Optional[int] = None,
        expiry_year: Optional[int] = None,
        is_default: bool = False,
        brand: Optional[str] = None,
    ) -> PaymentCard:
        """
        添加支付卡。
        用户的第一张卡自动成为默认卡。

        Args:
            user_id: 用户ID
            card_number: 完整卡号
            cardholder_name: 持卡人
            expiry_month: 有效期月
            expiry_year: 有效期年
            is_default: 是否设为默认
            brand: 卡组织，未指定时按卡号识别

        Returns:
            保存后的支付卡
        """
        number = CardNumber(card_number)
        first_card = self.card_repository.count_for_user(user_id) == 0
        make_default = is_default or first_card
        if make_default and not first_card:
            self.card_repository.unset_default(user_id)

        card = PaymentCard(
            user_id=user_id,
            card_brand=brand or number.brand,
            cardholder_name=cardholder_name,
            last4=number.last4,
            fingerprint=number.fingerprint,
            expiry_month=expiry_month,
            expiry_year=expiry_year,
            is_default=make_default,
        )
        return self.card_repository.save(card)

    def find_or_add_card(
        self,
        user_id: Any,
        card_number: str,
        cardholder_name: str,
        expiry_month: Optional[int] = None,
        expiry_year: Optional[int] = None,
        brand: Optional[str] = None,
    ) -> PaymentCard:
        """按卡号指纹查找用户已有的卡，找不到时新增"""
        number = CardNumber(card_number)
        existing = self.card_repository.find_by_fingerprint(user_id, number.fingerprint)
        if existing:
            return existing
        return self.add_card(
            user_id=user_id,
            card_number=number.digits,
            cardholder_name=cardholder_name,
            expiry_month=expiry_month,
            expiry_year=expiry_year,
            brand=brand,
        )

    def set_default(self, user_id: Any, card_id: Any) -> PaymentCard:
        card = self.card_repository.get_for_user(card_id, user_id)
        if not card:
            raise EntityNotFoundException("支付卡", card_id)
        self.card_repository.unset_default(user_id)
        card.is_default = True
        return self.card_repository.save(card)

    def delete_card(self, user_id: Any, card_id: Any) -> None:
        card = self.card_repository.get_for_user(card_id, user_id)
        if not card:
            raise EntityNotFoundException("支付卡", card_id)
        self.card_repository.delete(card)
