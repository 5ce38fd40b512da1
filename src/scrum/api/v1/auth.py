"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, Response, status
from starlette.requests import Request

from src.scrum.api.dependencies import AuthServiceDep
from src.scrum.core.rate_limit import limiter
from src.scrum.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from src.scrum.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created and signed in"},
        409: {"description": "Email already registered"},
        422: {"description": "Invalid email or weak password"},
    },
)
@limiter.limit("3/minute")
async def register(
    request: Request, register_data: RegisterRequest, service: AuthServiceDep
) -> RegisterResponse:
    """Create an account and return a token pair for it."""
    user, tokens = await service.register(
        register_data.email, register_data.password, register_data.full_name
    )
    return RegisterResponse(
        user=UserRead.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit("5/minute")
async def login(request: Request, login_data: LoginRequest, service: AuthServiceDep) -> TokenResponse:
    """Authenticate with email and password."""
    result = await service.authenticate(login_data.email, login_data.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return result


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        200: {"description": "Token refreshed with rotation"},
        401: {"description": "Invalid or expired refresh token"},
    },
)
@limiter.limit("10/minute")
async def refresh(
    request: Request, refresh_data: RefreshRequest, service: AuthServiceDep
) -> TokenResponse:
    """Exchange a refresh token for a new token pair.

    The presented refresh token is revoked, so it cannot be replayed.
    """
    result = await service.refresh_access_token(refresh_data.refresh_token)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return result


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={204: {"description": "Logged out (also for unknown tokens)"}},
)
async def logout(logout_data: LogoutRequest, service: AuthServiceDep) -> Response:
    """Revoke a refresh token and mark its user offline."""
    await service.logout(logout_data.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
