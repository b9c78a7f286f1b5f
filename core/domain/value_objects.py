"""
值对象基类和金额。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any


CENT = Decimal("0.01")


class ValueObject:
    """按全部属性比较相等的不可变对象"""

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        fields = sorted(vars(self).items(), key=lambda item: item[0])
        return hash((type(self).__name__,) + tuple(value for _, value in fields))


class Money(ValueObject):
    """
    带货币单位的金额。
    内部保留完整精度，quantize() 按分四舍五入（ROUND_HALF_UP）。
    不同货币之间的加减和比较抛出 ValueError。
    """

    def __init__(self, amount: Any, currency: str = "USD"):
        # 经 str 转换，避免 float 的二进制误差进入 Decimal
        self.amount = Decimal(str(amount))
        self.currency = currency

    @classmethod
    def zero(cls, currency: str = "USD") -> 'Money':
        return cls(0, currency)

    def _same_currency(self, other: 'Money') -> None:
        if other.currency != self.currency:
            raise ValueError(f"货币单位不一致: {self.currency} / {other.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, multiplier: Any) -> 'Money':
        return Money(self.amount * Decimal(str(multiplier)), self.currency)

    def __lt__(self, other: 'Money') -> bool:
        self._same_currency(other)
        return self.amount < other.amount

    def __gt__(self, other: 'Money') -> bool:
        self._same_currency(other)
        return self.amount > other.amount

    def min(self, other: 'Money') -> 'Money':
        return other if other < self else self

    def non_negative(self) -> 'Money':
        """负数截断为零"""
        return Money.zero(self.currency) if self.amount < 0 else self

    def quantize(self) -> 'Money':
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.quantize().amount}"
