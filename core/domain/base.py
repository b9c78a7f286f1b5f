"""
实体基类。
"""
from typing import Any
import uuid


class Entity:
    """
    具有唯一标识的领域对象。
    两个实体类型相同且ID相同即视为同一实体；新建实体在构造时分配UUID，
    因此保存前就可以被订单商品、库存变动等引用。
    """

    def __init__(self, id: Any = None):
        self.id = uuid.uuid4() if id is None else id

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and str(self.id) == str(other.id)

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self.id)))
