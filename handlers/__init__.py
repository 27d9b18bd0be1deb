"""
handlers/__init__.py
Centralized router registration for all bot handlers
"""

from handlers.errors import router as errors_router
from handlers.lookup import router as lookup_router
from handlers.start import router as start_router

# IMPORTANT ORDER:
# 1. /start and language buttons
# 2. Catch-all text lookup (must stay last, it swallows every text message)
routers = [
    errors_router,
    start_router,
    lookup_router,
]

__all__ = ["routers"]
