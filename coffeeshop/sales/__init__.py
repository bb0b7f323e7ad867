from .routes import sales_router

__all__ = ["sales_router"]
