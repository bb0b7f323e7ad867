from .routes import products_router

__all__ = ["products_router"]
