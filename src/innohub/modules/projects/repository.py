"""
Project Repository

Project-specific database operations. Generic record access goes through
``SubmissionRepository``.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.modules.projects.models import ProjectFlag


async def create_flag(
    db: AsyncSession,
    project_id: int,
    reporter_id: int,
    reason: str,
) -> ProjectFlag:
    """Create a new flag against a project."""
    flag = ProjectFlag(project_id=project_id, reporter_id=reporter_id, reason=reason)

    db.add(flag)
    await db.commit()
    await db.refresh(flag)

    return flag


async def get_open_flags(db: AsyncSession, project_id: int) -> list[ProjectFlag]:
    """Get unresolved flags for a project, oldest first."""
    result = await db.execute(
        select(ProjectFlag)
        .where(ProjectFlag.project_id == project_id, ProjectFlag.resolved.is_(False))
        .order_by(ProjectFlag.created_at.asc(), ProjectFlag.id.asc())
    )
    return list(result.scalars().all())
