"""
Startups Module

Startup directory with reviewer decisions:
1. Founder creates a Draft startup and submits it
2. Reviewer moves it to any status, optionally with a message
3. Approved startups appear in the public directory; reviewers may feature them

API Endpoints:
- /startups/* - Public directory and founder actions
- /admin/startups/* - Review (REVIEWER or ADMIN role)
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
