# 引用基础设施层的模型
from accounts.infrastructure.models.account_models import (
    User,
    PaymentCard,
    UserVisit,
)
