"""Contact Domain - contact form submissions (immutable once saved)"""

from .router import router

__all__ = ["router"]
