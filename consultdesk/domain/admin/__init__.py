"""Admin Domain - server-side admin login for the dashboard"""

from .router import router

__all__ = ["router"]
