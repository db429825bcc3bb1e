"""
Authentication and Authorization Dependencies

Resolves the calling ``Actor`` from the bearer token and provides role
guards for FastAPI endpoints. The actor is passed explicitly into every
service, gate and workflow call; nothing downstream reads request state.
"""

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from innohub.core.exceptions import ForbiddenError, UnauthenticatedError
from innohub.core.security import decode_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass(frozen=True)
class Actor:
    """
    The identity performing an action.

    Populated from JWT claims after token validation.

    Attributes:
        id: User's integer identifier
        email: User's email address
        role: User's role (ADMIN, REVIEWER, MEMBER, USER)
        name: User's display name (optional)
    """

    id: int
    email: str
    role: str
    name: str | None = None

    def has_role(self, *roles: str) -> bool:
        return self.role in roles

    def __str__(self) -> str:
        return f"Actor(id={self.id}, email={self.email}, role={self.role})"


# Identity used by background jobs
SYSTEM_ACTOR = Actor(id=0, email="system@innohub.local", role="ADMIN", name="System")


def actor_from_token(token: str) -> Actor:
    """
    Validate an access token and build the actor from its claims.

    Raises:
        UnauthenticatedError: If the token is invalid, expired, not an access
            token, or carries malformed claims
    """
    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise UnauthenticatedError("Invalid or expired authentication token.")

    token_type = payload.get("type", "access")
    if token_type != "access":
        logger.warning(f"Invalid token type: {token_type}")
        raise UnauthenticatedError("This endpoint requires an access token.")

    try:
        subject = payload.get("sub")
        if not subject:
            raise ValueError("Missing 'sub' claim in token")

        return Actor(
            id=int(subject),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
            name=payload.get("name"),
        )
    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise UnauthenticatedError("Token contains invalid or missing claims.") from e


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Actor:
    """
    FastAPI dependency that requires an authenticated actor.

    Usage:
        @router.post("/projects")
        async def create_project(actor: Actor = Depends(get_current_actor)):
            ...

    Raises:
        UnauthenticatedError: If the token is missing, invalid, or expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    actor = actor_from_token(credentials.credentials)
    logger.debug(f"Authenticated actor: {actor.id} ({actor.email})")
    return actor


async def get_optional_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Actor | None:
    """
    Optional authentication dependency.

    Returns the actor if a valid token is provided, or None if no token was
    sent. Public read endpoints use this to let owners and moderators see
    their non-public records. A present but invalid token is still rejected.
    """
    if credentials is None or not credentials.credentials:
        return None

    return actor_from_token(credentials.credentials)


def require_roles(*roles: str) -> Callable[..., Coroutine[Any, Any, Actor]]:
    """
    Build a dependency that requires the actor to hold one of ``roles``.

    Usage:
        @router.get("/admin/articles")
        async def list_articles(actor: Actor = Depends(require_roles("ADMIN"))):
            ...
    """

    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not actor.has_role(*roles):
            logger.warning(
                f"Access denied: User {actor.id} ({actor.email}) has role '{actor.role}', "
                f"but one of {list(roles)} is required"
            )
            raise ForbiddenError("You do not have the role required for this endpoint.")
        return actor

    return dependency


__all__ = [
    "Actor",
    "SYSTEM_ACTOR",
    "actor_from_token",
    "get_current_actor",
    "get_optional_actor",
    "require_roles",
]
