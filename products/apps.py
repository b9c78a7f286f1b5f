from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'products'
    verbose_name = "商品"

    def ready(self):
        from products.infrastructure.services.cache_manager import register_cache_handlers
        register_cache_handlers()
