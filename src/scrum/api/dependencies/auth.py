"""Authentication dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.scrum.api.dependencies.services import UserServiceDep
from src.scrum.core.logging import bind_user_context
from src.scrum.core.security import ACCESS_TOKEN_TYPE, decode_token
from src.scrum.models import User


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    user_service: UserServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the Bearer access token and return the active user.

    Also records presence (ONLINE, last seen) and binds the user to log context.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        raise _unauthorized("Invalid token payload") from e

    user = await user_service.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    await user_service.touch(user)
    bind_user_context(user.id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
