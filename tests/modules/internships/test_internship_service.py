"""
Tests for internship application service functions.
"""

from unittest.mock import MagicMock

import pytest

from innohub.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from innohub.modules.internships.models import InternshipApplication
from innohub.modules.internships.schemas import ApplicationCreate, ApplicationUpdate
from innohub.modules.internships.service import (
    advance_application,
    bulk_advance,
    create_application,
    get_application_status,
    list_applications_for_review,
    list_my_applications,
    score_application,
    submit_application,
    update_application,
)
from innohub.modules.workflow.listing import Pagination


@pytest.fixture
def repo(make_repository):
    return make_repository(InternshipApplication, "Internship application")


def make_application(owner_id, status="Draft", application_id=8):
    application = MagicMock(spec=InternshipApplication)
    application.id = application_id
    application.owner_id = owner_id
    application.position = "Backend Intern"
    application.status = status
    application.score = None
    return application


# ============================================
# Applicant
# ============================================


@pytest.mark.asyncio
async def test_create_application_draft(repo, owner):
    data = ApplicationCreate(position="Backend Intern", answers={"why": "Learning"})

    application = await create_application(repo, owner, data)

    assert application.status == "Draft"
    assert application.owner_id == owner.id
    assert application.answers == {"why": "Learning"}


@pytest.mark.asyncio
async def test_list_my_applications_filters_by_owner(repo, owner):
    repo.count.return_value = 1
    repo.find.return_value = [make_application(owner.id)]

    applications, meta = await list_my_applications(repo, owner, Pagination())

    assert len(applications) == 1
    assert meta.total == 1
    where = repo.count.await_args.args[0]
    assert len(where) == 1
    assert str(where[0].compile(compile_kwargs={"literal_binds": True})) == (
        f"internship_applications.owner_id = {owner.id}"
    )


@pytest.mark.asyncio
async def test_update_application(repo, owner):
    application = make_application(owner.id)
    repo.get_by_id.return_value = application

    result = await update_application(
        repo, application.id, owner, ApplicationUpdate(motivation="Updated")
    )

    assert result.motivation == "Updated"


@pytest.mark.asyncio
async def test_update_application_null_position_is_no_change(repo, owner):
    application = make_application(owner.id)
    repo.get_by_id.return_value = application

    await update_application(
        repo,
        application.id,
        owner,
        ApplicationUpdate.model_validate({"position": None, "motivation": None}),
    )

    # motivation is nullable, so an explicit null clears it
    repo.update.assert_awaited_once_with(application, {"motivation": None})


@pytest.mark.asyncio
async def test_update_application_other_user(repo, other_user):
    repo.get_by_id.return_value = make_application(owner_id=10)

    with pytest.raises(ForbiddenError):
        await update_application(repo, 8, other_user, ApplicationUpdate(motivation="x"))


@pytest.mark.asyncio
async def test_submit_application(repo, owner):
    application = make_application(owner.id)
    repo.get_by_id.return_value = application

    result = await submit_application(repo, application.id, owner)

    assert result.status == "Submitted"


@pytest.mark.asyncio
async def test_get_application_status(repo, owner, other_user):
    repo.get_by_id.return_value = make_application(owner.id, status="Interview")

    assert await get_application_status(repo, 8, owner) == "Interview"

    with pytest.raises(NotFoundError):
        await get_application_status(repo, 8, other_user)


# ============================================
# Reviewer
# ============================================


@pytest.mark.asyncio
async def test_list_applications_for_review_score_min(repo, reviewer):
    await list_applications_for_review(
        repo, reviewer, Pagination(), status="Submitted", score_min=70
    )

    where = repo.count.await_args.args[0]
    rendered = [str(w.compile(compile_kwargs={"literal_binds": True})) for w in where]
    assert rendered == [
        "internship_applications.score >= 70",
        "internship_applications.status = 'Submitted'",
    ]


@pytest.mark.asyncio
async def test_list_applications_for_review_requires_reviewer(repo, owner):
    with pytest.raises(ForbiddenError):
        await list_applications_for_review(repo, owner, Pagination())


@pytest.mark.asyncio
async def test_score_application(repo, reviewer):
    application = make_application(owner_id=10, status="Submitted")
    repo.get_by_id.return_value = application

    result = await score_application(repo, application.id, reviewer, 85)

    assert result.score == 85


@pytest.mark.asyncio
async def test_score_application_negative(repo, reviewer):
    with pytest.raises(ValidationError):
        await score_application(repo, 8, reviewer, -1)

    repo.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_score_application_owner_forbidden(repo, owner):
    repo.get_by_id.return_value = make_application(owner.id, status="Submitted")

    with pytest.raises(ForbiddenError):
        await score_application(repo, 8, owner, 100)


@pytest.mark.asyncio
async def test_advance_application(repo, reviewer):
    application = make_application(owner_id=10, status="Submitted")
    repo.get_by_id.return_value = application

    result = await advance_application(repo, application.id, reviewer, "Interview")

    assert result.status == "Interview"


@pytest.mark.asyncio
async def test_bulk_advance(repo, admin):
    repo.update_many.return_value = 2

    updated = await bulk_advance(repo, [1, 2, 2, 99], admin, " Accepted ")

    assert updated == 2
    repo.update_many.assert_awaited_once_with([1, 2, 99], {"status": "Accepted"})


@pytest.mark.asyncio
async def test_bulk_advance_requires_reviewer(repo, owner):
    with pytest.raises(ForbiddenError):
        await bulk_advance(repo, [1], owner, "Accepted")

    repo.update_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_bulk_advance_blank_status(repo, reviewer):
    with pytest.raises(ValidationError):
        await bulk_advance(repo, [1], reviewer, "   ")
