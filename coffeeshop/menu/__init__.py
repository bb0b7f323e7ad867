from .routes import menu_router

__all__ = ["menu_router"]
