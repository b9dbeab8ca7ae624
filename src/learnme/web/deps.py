"""Request dependencies shared by the routers.

The caller is identified by the X-User-Id header. Authentication itself
(sessions, passwords, tokens) happens in front of this API.
"""

from fastapi import Header, HTTPException, status

from learnme.db.progress_repository import ANONYMOUS_USER
from learnme.db.users_repository import UserRecord, get_user


async def optional_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    return x_user_id or None


async def progress_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Progress bucket of the caller, "anonymous" without a header."""
    return x_user_id or ANONYMOUS_USER


async def require_user(x_user_id: str | None = Header(default=None)) -> UserRecord:
    """Resolve the calling user.

    Raises:
        HTTPException: 401 without X-User-Id, 404 for an unknown user
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user = get_user(x_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user
