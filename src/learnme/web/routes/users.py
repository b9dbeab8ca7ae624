"""User and preference endpoints."""

import sqlite3

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from learnme.db.users_repository import (
    UserRecord,
    create_user,
    get_user,
    get_user_by_email,
    update_preferences,
)
from learnme.utils.validators import validate_email
from learnme.web.deps import require_user
from learnme.web.schemas import (
    PreferencesResponse,
    PreferencesUpdate,
    UserCreate,
    UserPreferences,
    UserResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["users"])


def _to_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        id=user.user_id,
        name=user.name,
        email=user.email,
        bio=user.bio,
        location=user.location,
        website=user.website,
        github=user.github,
        linkedin=user.linkedin,
        created_at=user.created_at,
    )


def _to_preferences(user: UserRecord) -> UserPreferences:
    return UserPreferences(
        id=user.user_id,
        name=user.name,
        email=user.email,
        favorite_languages=user.favorite_languages,
        theme=user.theme,
        auto_save=user.auto_save,
        show_hints=user.show_hints,
        learning_level=user.learning_level,
        preferred_pace=user.preferred_pace,
    )


@router.post("/api/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreate) -> UserResponse:
    """Create a new user."""
    email = user_data.email or None

    if email and not validate_email(email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email format",
        )

    if email and get_user_by_email(email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with email '{email}' already exists",
        )

    try:
        user = create_user(
            name=user_data.name,
            email=email,
            bio=user_data.bio,
            location=user_data.location,
            website=user_data.website,
            github=user_data.github,
            linkedin=user_data.linkedin,
        )
    except sqlite3.IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with email '{email}' already exists",
        )

    logger.info("user_registered", user_id=user.user_id)
    return _to_response(user)


@router.get("/api/users/{user_id}", response_model=UserResponse)
async def read_user(user_id: str) -> UserResponse:
    """Get a specific user by ID."""
    user = get_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found",
        )
    return _to_response(user)


@router.get("/api/user/preferences", response_model=PreferencesResponse)
async def read_preferences(user: UserRecord = Depends(require_user)) -> PreferencesResponse:
    """Get the caller's preferences."""
    return PreferencesResponse(user=_to_preferences(user))


@router.put("/api/user/preferences", response_model=PreferencesResponse)
async def write_preferences(
    changes: PreferencesUpdate,
    user: UserRecord = Depends(require_user),
) -> PreferencesResponse:
    """Update the caller's preferences. Omitted fields are left unchanged."""
    updated = update_preferences(user.user_id, changes.model_dump(exclude_none=True))
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return PreferencesResponse(user=_to_preferences(updated))
