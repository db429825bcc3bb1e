"""
Articles Module

Editorial articles written by admins:
1. Drafts created with a category and tags (connect-or-create by name)
2. Publish now, or schedule for a future date
3. Scheduled articles released by a background job once due

API Endpoints:
- GET /articles - Published articles, filter by tag and category
- GET /articles/{slug} - Article detail
- GET /articles/{id}/related - Related published articles
- /admin/articles/* - Admin management (ADMIN role)

Background Jobs (via APScheduler):
- articles_release_scheduled: Publishes due SCHEDULED articles
"""

from .admin_router import router as admin_router
from .jobs import register_article_jobs
from .router import router

__all__ = ["router", "admin_router", "register_article_jobs"]
