"""
Workflow module - Status workflow engine shared by every submission kind.

Slug generation, the generic submission repository, the authorization gate,
the declarative transition table and the listing service.
"""

from innohub.modules.workflow.authorization import Action, authorize, ensure_authorized
from innohub.modules.workflow.engine import (
    TransitionPayload,
    Trigger,
    plan_transition,
    transition,
)
from innohub.modules.workflow.kinds import Kind, KindPolicy, policy_for
from innohub.modules.workflow.listing import Page, PageMeta, Pagination, list_submissions
from innohub.modules.workflow.repository import SubmissionRepository
from innohub.modules.workflow.slug import generate_slug, require_slug

__all__ = [
    "Action",
    "authorize",
    "ensure_authorized",
    "TransitionPayload",
    "Trigger",
    "plan_transition",
    "transition",
    "Kind",
    "KindPolicy",
    "policy_for",
    "Page",
    "PageMeta",
    "Pagination",
    "list_submissions",
    "SubmissionRepository",
    "generate_slug",
    "require_slug",
]
