from duochat.web.routers.auth import router as auth_router
from duochat.web.routers.chat import router as chat_router

__all__ = [
    "auth_router",
    "chat_router",
]
