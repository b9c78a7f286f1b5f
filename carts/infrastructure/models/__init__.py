from carts.infrastructure.models.cart_models import Cart, CartItem, Favorite

__all__ = ['Cart', 'CartItem', 'Favorite']
