from .routes import warehouse_router

__all__ = ["warehouse_router"]
