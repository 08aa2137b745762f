# Storefront Routes

from .cart import router as cart_router
from .products import router as products_router
from .layout import router as layout_router
from .contact import router as contact_router

__all__ = ["cart_router", "products_router", "layout_router", "contact_router"]
