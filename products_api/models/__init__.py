from products_api.models.product import Product

__all__ = [
    "Product",
]
