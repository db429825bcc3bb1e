from fastapi import APIRouter

from innohub.modules.articles import admin_router as admin_articles_router
from innohub.modules.articles import router as articles_router
from innohub.modules.auth import router as auth_router
from innohub.modules.internships import admin_router as admin_internships_router
from innohub.modules.internships import router as internships_router
from innohub.modules.projects import admin_router as admin_projects_router
from innohub.modules.projects import router as projects_router
from innohub.modules.startups import admin_router as admin_startups_router
from innohub.modules.startups import router as startups_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(articles_router, prefix="/articles", tags=["Articles"])
api_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
api_router.include_router(startups_router, prefix="/startups", tags=["Startups"])
api_router.include_router(
    internships_router, prefix="/internship-applications", tags=["Internship Applications"]
)

api_router.include_router(
    admin_articles_router, prefix="/admin/articles", tags=["Admin - Articles"]
)
api_router.include_router(
    admin_projects_router, prefix="/admin/projects", tags=["Admin - Projects"]
)
api_router.include_router(
    admin_startups_router, prefix="/admin/startups", tags=["Admin - Startups"]
)
api_router.include_router(
    admin_internships_router,
    prefix="/admin/internship-applications",
    tags=["Admin - Internship Applications"],
)
