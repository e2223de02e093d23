"""
API routers.

- public: course catalog and registration form
- admin: session management, registration review and catalog editing
"""

from src.api.routers.admin import router as admin_router
from src.api.routers.public import router as public_router

__all__ = ["admin_router", "public_router"]
