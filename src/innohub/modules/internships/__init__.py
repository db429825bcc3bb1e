"""
Internship Applications Module

Applicants create Draft applications and submit them; reviewers score
them and move them through statuses of their choosing, one at a time or
in bulk. Applications are never listed publicly.

API Endpoints:
- /internship-applications/* - Applicant actions
- /admin/internship-applications/* - Review (REVIEWER or ADMIN role)
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
