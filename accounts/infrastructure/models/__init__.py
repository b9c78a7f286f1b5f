from accounts.infrastructure.models.account_models import User, PaymentCard, UserVisit

__all__ = ['User', 'PaymentCard', 'UserVisit']
