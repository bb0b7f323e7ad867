from .routes import exports_router

__all__ = ["exports_router"]
