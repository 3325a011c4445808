# Models package (re-export feature modules for stable imports)
from .users.user import User, utcnow

__all__ = [
    "User",
    "utcnow",
]
