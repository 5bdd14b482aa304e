from access_core.web.routers.navigation import router

__all__ = ["router"]
