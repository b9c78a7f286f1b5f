"""
账户领域模型中的值对象。
包含卡号和重置令牌值对象。
"""
import hashlib
import re
import secrets
from typing import Tuple

from core.domain import ValueObject, ValidationException


class CardBrand:
    """卡组织"""
    VISA = "Visa"
    MASTERCARD = "Mastercard"
    AMEX = "Amex"
    UNKNOWN = "Unknown"


# 按顺序匹配
CARD_BRAND_PATTERNS: Tuple[Tuple[str, str], ...] = (
    (r"^4", CardBrand.VISA),
    (r"^5[1-5]", CardBrand.MASTERCARD),
    (r"^3[47]", CardBrand.AMEX),
)


class CardNumber(ValueObject):
    """
    卡号值对象。
    构造时去掉空格和连字符，只接受8到19位数字。
    """

    def __init__(self, raw: str):
        digits = re.sub(r"[\s-]", "", str(raw or ""))
        if not digits.isdigit() or not 8 <= len(digits) <= 19:
            raise ValidationException("card_number", "卡号格式无效")
        self.digits = digits

    @property
    def last4(self) -> str:
        return self.digits[-4:]

    @property
    def brand(self) -> str:
        """根据卡号前缀识别卡组织"""
        for pattern, brand in CARD_BRAND_PATTERNS:
            if re.match(pattern, self.digits):
                return brand
        return CardBrand.UNKNOWN

    @property
    def fingerprint(self) -> str:
        """卡号的sha256摘要，用于识别同一张卡"""
        return hashlib.sha256(self.digits.encode("utf-8")).hexdigest()

    def __str__(self) -> str:
        return f"**** {self.last4}"


class ResetToken(ValueObject):
    """
    重置密码令牌。
    明文令牌只通过邮件发送给用户，数据库中只保存摘要。
    """

    def __init__(self, raw: str):
        self.raw = raw

    @classmethod
    def generate(cls) -> 'ResetToken':
        """生成32字节随机令牌的十六进制表示"""
        return cls(secrets.token_hex(32))

    @staticmethod
    def hash_of(raw: str) -> str:
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    @property
    def hashed(self) -> str:
        return self.hash_of(self.raw)
