"""Catalog domain exports"""

from .exceptions import ProductInactiveError, ProductNotFoundError, UnknownCategoryError
from .models import SERVICE_CATEGORIES, Product, ServiceProvider

__all__ = [
    "Product",
    "ProductInactiveError",
    "ProductNotFoundError",
    "SERVICE_CATEGORIES",
    "ServiceProvider",
    "UnknownCategoryError",
]
