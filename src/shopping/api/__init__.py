"""Shopping API package."""

from shopping.api.routes import basket_router, order_router

__all__ = ["basket_router", "order_router"]
