"""
Tests for project service functions.

These tests verify:
- Creation, updates and the owner edit lock
- Media handling and the cover image
- Submission and flagging
- Admin moderation and owner notification
- Public and admin listings
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from innohub.core.exceptions import (
    DuplicateSlugError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from innohub.modules.projects.models import MediaType, Project
from innohub.modules.projects.schemas import FlagCreate, MediaCreate, ProjectCreate, ProjectUpdate
from innohub.modules.projects.service import (
    add_project_media,
    approve_project,
    create_project,
    flag_project,
    get_project_flags,
    list_projects_for_admin,
    list_public_projects,
    reject_project,
    request_project_changes,
    submit_project,
    update_project,
)
from innohub.modules.workflow.listing import Pagination
from innohub.modules.workflow.statuses import ProjectStatus

# ============================================
# Fixtures
# ============================================


@pytest.fixture
def repo(make_repository):
    return make_repository(Project, "Project")


@pytest.fixture(autouse=True)
def mock_taxonomy():
    with patch("innohub.modules.projects.service.taxonomy") as taxonomy:
        taxonomy.get_or_create_tags = AsyncMock(return_value=[])
        yield taxonomy


@pytest.fixture
def mock_notify():
    with patch("innohub.modules.projects.service.notify_owner", new_callable=AsyncMock) as notify:
        notify.return_value = True
        yield notify


def make_project(owner_id, status=ProjectStatus.PENDING, project_id=7):
    project = MagicMock(spec=Project)
    project.id = project_id
    project.owner_id = owner_id
    project.title = "Cool App 2.0"
    project.slug = "cool-app-2-0"
    project.status = status
    project.cover_image = None
    project.media = []
    project.submitted_at = None
    project.featured_at = None
    project.mod_notes = None
    return project


def project_create(title="Cool App 2.0"):
    return ProjectCreate(
        title=title,
        summary="A cool app",
        team_name="Team Rocket",
        team_members=[{"name": "Ada", "role": "Lead"}],
        stack=["python", "react"],
        tags=["ai"],
    )


# ============================================
# Test create_project
# ============================================


@pytest.mark.asyncio
async def test_create_project_pending_with_slug(repo, owner):
    project = await create_project(repo, owner, project_create())

    assert project.slug == "cool-app-2-0"
    assert project.status == ProjectStatus.PENDING
    assert project.owner_id == owner.id
    assert project.team_members == [{"name": "Ada", "role": "Lead", "link": None}]
    assert project.stack == ["python", "react"]


@pytest.mark.asyncio
async def test_create_project_duplicate_slug(repo, owner):
    repo.slug_exists.return_value = True

    with pytest.raises(DuplicateSlugError):
        await create_project(repo, owner, project_create("Cool App 2.0!!"))

    repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_project_title_without_slug_characters(repo, owner):
    with pytest.raises(ValidationError):
        await create_project(repo, owner, project_create("!!!"))


# ============================================
# Test update_project
# ============================================


@pytest.mark.asyncio
async def test_owner_updates_pending_project(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project

    result = await update_project(repo, project.id, owner, ProjectUpdate(summary="Better"))

    assert result.summary == "Better"


@pytest.mark.asyncio
async def test_update_project_null_required_fields_are_no_change(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project

    await update_project(
        repo,
        project.id,
        owner,
        ProjectUpdate.model_validate({"title": None, "summary": None, "team_name": None}),
    )

    repo.update.assert_awaited_once_with(project, {})


@pytest.mark.asyncio
async def test_owner_cannot_update_approved_project(repo, owner):
    project = make_project(owner.id, status=ProjectStatus.APPROVED)
    repo.get_by_id.return_value = project

    with pytest.raises(ForbiddenError):
        await update_project(repo, project.id, owner, ProjectUpdate(summary="Sneaky"))

    repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_updates_approved_project(repo, admin):
    project = make_project(owner_id=10, status=ProjectStatus.APPROVED)
    repo.get_by_id.return_value = project

    result = await update_project(repo, project.id, admin, ProjectUpdate(title="Renamed"))

    assert result.slug == "renamed"


@pytest.mark.asyncio
async def test_update_to_taken_title(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project
    repo.slug_exists.return_value = True

    with pytest.raises(DuplicateSlugError):
        await update_project(repo, project.id, owner, ProjectUpdate(title="Taken Title"))


# ============================================
# Test add_project_media
# ============================================


@pytest.mark.asyncio
async def test_first_image_becomes_cover(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project

    result = await add_project_media(
        repo, project.id, owner, MediaCreate(url="https://img/1.png", type=MediaType.IMAGE)
    )

    assert result.cover_image == "https://img/1.png"
    assert len(result.media) == 1


@pytest.mark.asyncio
async def test_video_does_not_become_cover(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project

    result = await add_project_media(
        repo, project.id, owner, MediaCreate(url="https://vid/1.mp4", type=MediaType.VIDEO)
    )

    assert result.cover_image is None


@pytest.mark.asyncio
async def test_existing_cover_is_kept(repo, owner):
    project = make_project(owner.id)
    project.cover_image = "https://img/cover.png"
    repo.get_by_id.return_value = project

    await add_project_media(repo, project.id, owner, MediaCreate(url="https://img/2.png"))

    _, changes = repo.update.await_args.args
    assert "cover_image" not in changes


# ============================================
# Test submit_project
# ============================================


@pytest.mark.asyncio
async def test_submit_project(repo, owner):
    project = make_project(owner.id)
    repo.get_by_id.return_value = project

    result = await submit_project(repo, project.id, owner)

    assert result.status == "SUBMITTED"
    assert isinstance(result.submitted_at, datetime)
    assert result.submitted_at.tzinfo == UTC


@pytest.mark.asyncio
async def test_resubmit_after_changes_requested(repo, owner):
    project = make_project(owner.id, status=ProjectStatus.CHANGES_REQUESTED)
    repo.get_by_id.return_value = project

    result = await submit_project(repo, project.id, owner)

    assert result.status == "SUBMITTED"


@pytest.mark.asyncio
async def test_submit_submitted_project(repo, owner):
    project = make_project(owner.id, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    with pytest.raises(InvalidStateError):
        await submit_project(repo, project.id, owner)


# ============================================
# Test flag_project
# ============================================


@pytest.mark.asyncio
async def test_flag_public_project(repo, other_user):
    project = make_project(owner_id=10, status=ProjectStatus.APPROVED)
    repo.get_by_id.return_value = project
    flag = MagicMock()
    flag.id = 3

    with patch("innohub.modules.projects.service.repository") as project_repository:
        project_repository.create_flag = AsyncMock(return_value=flag)

        result = await flag_project(repo, project.id, other_user, FlagCreate(reason="Spam"))

        assert result is flag
        project_repository.create_flag.assert_awaited_once_with(
            repo.db, project.id, other_user.id, "Spam"
        )


@pytest.mark.asyncio
async def test_flag_hidden_project(repo, other_user):
    repo.get_by_id.return_value = make_project(owner_id=10, status=ProjectStatus.PENDING)

    with pytest.raises(NotFoundError):
        await flag_project(repo, 7, other_user, FlagCreate(reason="Spam"))


@pytest.mark.asyncio
async def test_get_project_flags_admin_only(repo, owner):
    repo.get_by_id.return_value = make_project(owner.id, status=ProjectStatus.APPROVED)

    with pytest.raises(ForbiddenError):
        await get_project_flags(repo, 7, owner)


# ============================================
# Test moderation
# ============================================


@pytest.mark.asyncio
async def test_approve_project(repo, admin, mock_notify):
    project = make_project(owner_id=10, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    result = await approve_project(repo, project.id, admin)

    assert result.status == "APPROVED"
    assert result.featured_at is None
    mock_notify.assert_awaited_once()
    assert mock_notify.await_args.args[4] == "/projects/cool-app-2-0"


@pytest.mark.asyncio
async def test_approve_featured_project(repo, admin, mock_notify):
    project = make_project(owner_id=10, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    result = await approve_project(repo, project.id, admin, featured=True)

    assert result.status == "FEATURED"
    assert result.featured_at is not None


@pytest.mark.asyncio
async def test_reject_project_stores_reason(repo, admin, mock_notify):
    project = make_project(owner_id=10, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    result = await reject_project(repo, project.id, admin, "Not a real project")

    assert result.status == "REJECTED"
    assert result.mod_notes == "Not a real project"
    assert mock_notify.await_args.kwargs["notes"] == "Not a real project"


@pytest.mark.asyncio
async def test_request_changes(repo, admin, mock_notify):
    project = make_project(owner_id=10, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    result = await request_project_changes(repo, project.id, admin, "Add a demo link")

    assert result.status == "CHANGES_REQUESTED"
    assert result.mod_notes == "Add a demo link"


@pytest.mark.asyncio
async def test_owner_cannot_approve(repo, owner, mock_notify):
    project = make_project(owner.id, status=ProjectStatus.SUBMITTED)
    repo.get_by_id.return_value = project

    with pytest.raises(ForbiddenError):
        await approve_project(repo, project.id, owner)

    assert project.status == ProjectStatus.SUBMITTED
    mock_notify.assert_not_awaited()


# ============================================
# Test listings
# ============================================


@pytest.mark.asyncio
async def test_list_public_projects_filters(repo):
    await list_public_projects(
        repo, Pagination(), status="PENDING", tag="ai", team="rocket", stack="python", country="GH"
    )

    where = repo.count.await_args.args[0]
    # four filters plus the public status restriction
    assert len(where) == 5
    assert "PENDING" not in str(where[-1].compile(compile_kwargs={"literal_binds": True}))
    order_by = [str(o) for o in repo.find.await_args.kwargs["order_by"]]
    assert order_by == [
        "projects.featured_at DESC NULLS LAST",
        "projects.created_at DESC",
        "projects.id ASC",
    ]


@pytest.mark.asyncio
async def test_list_projects_for_admin_by_status(repo, admin):
    await list_projects_for_admin(repo, admin, Pagination(), status=ProjectStatus.SUBMITTED)

    where = repo.count.await_args.args[0]
    assert len(where) == 1
    order_by = [str(o) for o in repo.find.await_args.kwargs["order_by"]]
    assert order_by[0] == "projects.status ASC"
    assert order_by[1].startswith("projects.submitted_at ASC")
    assert order_by[-1] == "projects.id ASC"
