"""
Authentication router.

Endpoints:
- POST /auth/register - Create a USER account
- POST /auth/login - Exchange credentials for JWT tokens
- GET /auth/me - Current user
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.auth import Actor, get_current_actor
from innohub.core.database import get_db
from innohub.core.exceptions import (
    EmailAlreadyRegisteredError,
    ForbiddenError,
    UnauthenticatedError,
)
from innohub.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
)
from innohub.modules.auth.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from innohub.modules.users.models import User, UserRole
from innohub.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        avatar_url=user.avatar_url,
        role=user.role.value,
        is_active=user.is_active,
        created_at=user.created_at,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email already registered"}},
)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """
    Create a new account with the USER role.

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    email = data.email.lower()
    if await UserRepository.email_exists(db, email):
        logger.info(f"Registration attempt for existing email: {email}")
        raise EmailAlreadyRegisteredError(email)

    user = await UserRepository.create(
        db,
        email=email,
        password_hash=hash_password(data.password),
        role=UserRole.USER,
        name=data.name,
    )

    logger.info(f"User registered: {user.email} (id: {user.id})")
    return _user_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate user and return JWT tokens.

    Args:
        credentials: Email and password
        db: Database session

    Returns:
        Access token, refresh token, and user info

    Raises:
        UnauthenticatedError: Invalid credentials
        ForbiddenError: Account inactive
    """
    user = await UserRepository.get_by_email(db, credentials.email.lower())

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login for: {credentials.email}")
        raise UnauthenticatedError("Invalid email or password.")

    if not user.is_active:
        logger.warning(f"Login attempt for inactive account: {credentials.email}")
        raise ForbiddenError("Your account has been deactivated.")

    access_token = create_access_token(
        subject=str(user.id),
        additional_claims={
            "email": user.email,
            "role": user.role.value,
            "name": user.display_name,
        },
    )
    refresh_token = create_refresh_token(subject=str(user.id))

    logger.info(f"User logged in: {user.email} (role: {user.role.value})")

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=_user_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Return the account behind the bearer token."""
    user = await UserRepository.get_by_id(db, actor.id)
    if user is None or not user.is_active:
        raise UnauthenticatedError()
    return _user_response(user)
