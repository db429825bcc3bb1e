"""
Articles Background Jobs

Publishes SCHEDULED articles once their publish date has passed. The job
opens its own database session, is idempotent, and can be triggered
manually through ``trigger_job_manually``.
"""

import logging
from typing import Any

from apscheduler.triggers.interval import IntervalTrigger

from innohub.core.config import settings
from innohub.core.database import async_session_maker
from innohub.core.scheduler import register_job
from innohub.modules.articles import service
from innohub.modules.articles.models import Article
from innohub.modules.workflow.repository import SubmissionRepository

logger = logging.getLogger(__name__)

JOB_ID_RELEASE_SCHEDULED = "articles_release_scheduled"


async def release_scheduled_articles() -> dict[str, Any]:
    """Release every scheduled article that is due."""
    async with async_session_maker() as db:
        repo = SubmissionRepository(db, Article, "Article")
        results = await service.release_scheduled_articles(repo)

    logger.info(
        f"Scheduled article release completed. "
        f"Released: {len(results['released'])}, Errors: {results['total_errors']}"
    )
    return results


def register_article_jobs() -> None:
    """Register the article jobs with the scheduler. Call before starting it."""
    interval = settings.release_job_interval_minutes
    register_job(
        job_id=JOB_ID_RELEASE_SCHEDULED,
        func=release_scheduled_articles,
        trigger=IntervalTrigger(minutes=interval),
    )
    logger.info(f"Registered job: {JOB_ID_RELEASE_SCHEDULED} (interval: {interval} minutes)")
