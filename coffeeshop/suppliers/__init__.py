from .routes import suppliers_router

__all__ = ["suppliers_router"]
