"""
Projects Module

Project showcase submitted by members and moderated by admins:
1. Owner creates a PENDING project, attaches media, submits it
2. Admin approves (optionally featured), rejects, or requests changes
3. Owner edits again while CHANGES_REQUESTED and resubmits

API Endpoints:
- /projects/* - Public directory and owner actions
- /admin/projects/* - Moderation (ADMIN role, rate limited)
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
