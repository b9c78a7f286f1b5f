"""
账户应用服务层的数据传输对象(DTOs)。
"""
from typing import Any, Dict, List

from accounts.domain import UserAccount, PaymentCard


class UserDTO:
    """用户摘要DTO，用于注册、登录和后台列表"""

    def __init__(self, id: str, email: str, fullname: str, role: str, created_at: Any = None):
        self.id = id
        self.email = email
        self.fullname = fullname
        self.role = role
        self.created_at = created_at

    @classmethod
    def from_entity(cls, user: UserAccount) -> 'UserDTO':
        return cls(
            id=str(user.id),
            email=user.email,
            fullname=user.fullname,
            role=user.role,
            created_at=user.date_joined,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'email': self.email,
            'fullname': self.fullname,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class ProfileDTO:
    """个人资料DTO"""

    def __init__(self, id: str, fullname: str, image: str, email: str, phone: str, address: str, bio: str):
        self.id = id
        self.fullname = fullname
        self.image = image
        self.email = email
        self.phone = phone
        self.address = address
        self.bio = bio

    @classmethod
    def from_entity(cls, user: UserAccount) -> 'ProfileDTO':
        return cls(
            id=str(user.id),
            fullname=user.fullname,
            image=user.image,
            email=user.email,
            phone=user.phone_number,
            address=user.address,
            bio=user.bio,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fullname': self.fullname,
            'image': self.image,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'bio': self.bio,
        }


class PaymentCardDTO:
    """支付卡DTO，不包含卡号指纹"""

    def __init__(self, card: PaymentCard):
        self.id = str(card.id)
        self.card_brand = card.card_brand
        self.cardholder_name = card.cardholder_name
        self.last4 = card.last4
        self.expiry_month = card.expiry_month
        self.expiry_year = card.expiry_year
        self.is_default = card.is_default
        self.created_at = card.created_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'card_brand': self.card_brand,
            'cardholder_name': self.cardholder_name,
            'last4': self.last4,
            'expiry_month': self.expiry_month,
            'expiry_year': self.expiry_year,
            'is_default': self.is_default,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class UserListDTO:
    """用户分页列表DTO"""

    def __init__(self, items: List[UserDTO], total: int, page: int, page_size: int):
        self.items = items
        self.total = total
        self.page = page
        self.page_size = page_size
