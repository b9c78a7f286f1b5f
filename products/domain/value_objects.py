"""
商品领域模型中的值对象。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from core.domain import ValueObject, ValidationException


RATING_MIN = 1
RATING_MAX = 5
REVIEW_MAX_LENGTH = 1000


class Rating(ValueObject):
    """
    评分值对象。
    单次评分为1到5的整数，平均分保留一位小数。
    """

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool) or not RATING_MIN <= value <= RATING_MAX:
            raise ValidationException("rating", f"评分必须是{RATING_MIN}到{RATING_MAX}之间的整数")
        self.value = value

    @staticmethod
    def average(values: Iterable[int]) -> Decimal:
        """
        计算平均评分。

        Args:
            values: 评分列表

        Returns:
            保留一位小数的平均分，没有评分时为0
        """
        values = list(values)
        if not values:
            return Decimal("0.0")
        mean = Decimal(sum(values)) / Decimal(len(values))
        return mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


class ReviewText(ValueObject):
    """评价内容值对象，最长1000个字符"""

    def __init__(self, text: str):
        text = (text or "").strip()
        if len(text) > REVIEW_MAX_LENGTH:
            raise ValidationException("review", f"评价内容不能超过{REVIEW_MAX_LENGTH}个字符")
        self.text = text

    def __str__(self) -> str:
        return self.text
