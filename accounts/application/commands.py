"""
账户应用服务层的命令对象。
定义用于修改账户状态的命令。
"""
from datetime import datetime
from typing import Any, List, Optional


class RegisterUserCommand:
    """注册用户命令"""

    def __init__(self, name: str, email: str, password: str):
        """
        初始化注册用户命令。

        Args:
            name: 姓名
            email: 邮箱
            password: 明文密码
        """
        self.name = name
        self.email = email
        self.password = password


class RequestPasswordResetCommand:
    """申请重置密码命令"""

    def __init__(self, email: str):
        self.email = email


class ResetPasswordCommand:
    """使用令牌重置密码命令"""

    def __init__(self, token: str, new_password: str):
        self.token = token
        self.new_password = new_password


class ChangePasswordCommand:
    """修改密码命令"""

    def __init__(self, user_id: Any, current_password: str, new_password: str):
        self.user_id = user_id
        self.current_password = current_password
        self.new_password = new_password


class UpdateProfileCommand:
    """更新个人资料命令"""

    def __init__(
        self,
        user_id: Any,
        fullname: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
    ):
        """
        初始化更新个人资料命令。

        Args:
            user_id: 用户ID
            fullname: 姓名
            phone: 电话
            address: 地址
            bio: 个人简介
            avatar: base64 data URL 格式的新头像，为空表示不修改
        """
        self.user_id = user_id
        self.fullname = fullname
        self.phone = phone
        self.address = address
        self.bio = bio
        self.avatar = avatar


class AddPaymentCardCommand:
    """添加支付卡命令"""

    def __init__(
        self,
        user_id: Any,
        card_number: str,
        cardholder_name: str,
        expiry_month: Optional[int] = None,
        expiry_year: Optional[int] = None,
        is_default: bool = False,
    ):
        self.user_id = user_id
        self.card_number = card_number
        self.cardholder_name = cardholder_name
        self.expiry_month = expiry_month
        self.expiry_year = expiry_year
        self.is_default = is_default


class LogVisitCommand:
    """记录访问命令"""

    def __init__(
        self,
        ip: Optional[str],
        user_agent: str,
        url: str,
        timestamp: Optional[datetime] = None,
        user_id: Any = None,
    ):
        self.ip = ip
        self.user_agent = user_agent
        self.url = url
        self.timestamp = timestamp
        self.user_id = user_id


class BulkDeleteUsersCommand:
    """批量删除用户命令，操作者本人不会被删除"""

    def __init__(self, ids: List[Any], operator_id: Any):
        self.ids = ids
        self.operator_id = operator_id
