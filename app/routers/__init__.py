# Routers package
from . import user_router

__all__ = [
    "user_router",
]
