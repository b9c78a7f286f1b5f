from products.infrastructure.models.product_models import Category, Product, ProductReview, StockMovement

__all__ = ['Category', 'Product', 'ProductReview', 'StockMovement']
