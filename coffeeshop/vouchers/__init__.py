from .routes import vouchers_router

__all__ = ["vouchers_router"]
