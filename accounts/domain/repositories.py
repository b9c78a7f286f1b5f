"""
账户领域模型中的仓储接口。
定义用户、支付卡、访问日志的仓储接口，以及邮件和头像存储服务接口。
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from core.domain.repositories import Repository
from accounts.domain.entities import UserAccount, PaymentCard


class UserRepository(Repository[UserAccount]):
    """
    用户仓储接口。
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserAccount]:
        """
        根据邮箱获取用户，邮箱比较不区分大小写。

        Args:
            email: 邮箱

        Returns:
            找到的用户，如果不存在则返回None
        """
        pass

    @abstractmethod
    def get_by_reset_token(self, token_hash: str) -> Optional[UserAccount]:
        """根据重置令牌摘要获取用户"""
        pass

    @abstractmethod
    def create(self, user: UserAccount, raw_password: str) -> UserAccount:
        """
        创建用户并设置密码。

        Args:
            user: 用户实体
            raw_password: 明文密码

        Returns:
            创建后的用户
        """
        pass

    @abstractmethod
    def set_password(self, user_id: Any, raw_password: str) -> None:
        pass

    @abstractmethod
    def check_password(self, user_id: Any, raw_password: str) -> bool:
        pass

    @abstractmethod
    def search(
        self,
        keyword: str = "",
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[UserAccount], int]:
        """
        分页搜索用户，关键词匹配邮箱。

        Args:
            keyword: 邮箱关键词
            filters: 过滤条件，支持 role
            page: 页码
            page_size: 每页大小

        Returns:
            用户列表和总数的元组
        """
        pass

    @abstractmethod
    def delete_many(self, ids: List[Any], exclude_id: Any = None) -> int:
        """批量删除用户，返回删除数量"""
        pass


class PaymentCardRepository(Repository[PaymentCard]):
    """
    支付卡仓储接口。
    """

    @abstractmethod
    def list_for_user(self, user_id: Any) -> List[PaymentCard]:
        """默认卡在前，其余按创建时间倒序"""
        pass

    @abstractmethod
    def get_for_user(self, card_id: Any, user_id: Any) -> Optional[PaymentCard]:
        pass

    @abstractmethod
    def find_by_fingerprint(self, user_id: Any, fingerprint: str) -> Optional[PaymentCard]:
        pass

    @abstractmethod
    def count_for_user(self, user_id: Any) -> int:
        pass

    @abstractmethod
    def unset_default(self, user_id: Any) -> None:
        """取消用户所有卡的默认标记"""
        pass

    @abstractmethod
    def delete(self, card: PaymentCard) -> None:
        pass


class VisitRepository(ABC):
    """访问日志仓储接口"""

    @abstractmethod
    def add(
        self,
        ip: Optional[str],
        user_agent: str,
        url: str,
        timestamp: datetime,
        user_id: Any = None
    ) -> Any:
        """
        记录一次访问。

        Returns:
            访问记录ID
        """
        pass


class MailService(ABC):
    """邮件发送服务接口"""

    @abstractmethod
    def send(self, subject: str, message: str, recipient: str) -> None:
        pass


class AvatarStorage(ABC):
    """头像文件存储服务接口"""

    @abstractmethod
    def save(self, user_id: Any, extension: str, content: bytes) -> str:
        """
        保存头像文件。

        Returns:
            可公开访问的头像地址
        """
        pass

    @abstractmethod
    def delete(self, url: str) -> None:
        pass
