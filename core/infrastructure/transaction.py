"""
事务管理。
应用服务只依赖 TransactionManager 接口，用 start() 包住一次完整的用例，
例如下单时的计价、扣库存、记录促销码使用和清理购物车。
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Generator, Optional

from django.db import transaction as django_transaction
from loguru import logger


class TransactionManager(ABC):
    """事务管理器接口"""

    @abstractmethod
    @contextmanager
    def start(self) -> Generator[None, None, None]:
        """作用域正常结束时提交，抛出异常时回滚"""
        pass

    @abstractmethod
    def on_commit(self, callback: Callable[[], None]) -> None:
        """当前事务提交后执行回调，回滚时丢弃"""
        pass


class DjangoTransactionManager(TransactionManager):
    """
    基于 transaction.atomic() 的实现。
    嵌套的 start() 使用保存点，只有最外层提交时数据才会落库。
    """

    def __init__(self, using: Optional[str] = None):
        """
        Args:
            using: 数据库别名，默认使用 default
        """
        self.using = using

    @contextmanager
    def start(self) -> Generator[None, None, None]:
        try:
            with django_transaction.atomic(using=self.using):
                yield
        except Exception as e:
            logger.warning(f"事务已回滚: {e.__class__.__name__}: {e}")
            raise

    def on_commit(self, callback: Callable[[], None]) -> None:
        django_transaction.on_commit(callback, using=self.using)
