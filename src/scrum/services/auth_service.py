"""Authentication service - registration, login, token refresh and logout."""

import hmac
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import AlreadyExistsError
from src.scrum.core.logging import get_logger
from src.scrum.core.security import (
    DUMMY_PASSWORD_HASH,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.scrum.models import RefreshToken, User, UserStatus
from src.scrum.models.base import utc_now
from src.scrum.repositories import RefreshTokenRepository, UserRepository
from src.scrum.schemas.auth import TokenResponse

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.session = session

    def _issue_tokens(self, user_id: UUID) -> TokenResponse:
        """Create an access/refresh pair and stage the refresh token hash (no commit)."""
        access_token = create_access_token(user_id)
        refresh_token, expires_at = create_refresh_token(user_id)
        self.token_repo.add(
            RefreshToken(
                user_id=user_id,
                token_hash=hash_token(refresh_token),
                expires_at=expires_at,
            )
        )
        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def register(self, email: str, password: str, full_name: str) -> tuple[User, TokenResponse]:
        """Create a user and sign them in.

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        email = email.lower()
        if await self.user_repo.exists_by_email(email):
            raise AlreadyExistsError(f"User with email '{email}' already exists")

        try:
            user = User(
                email=email,
                hashed_password=hash_password(password),
                full_name=full_name,
                status=UserStatus.ONLINE.value,
                last_seen_at=utc_now(),
            )
            self.user_repo.add(user)
            await self.session.flush()
            tokens = self._issue_tokens(user.id)
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise AlreadyExistsError(f"User with email '{email}' already exists") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User registered", user_id=str(user.id))
        return user, tokens

    async def authenticate(self, email: str, password: str) -> TokenResponse | None:
        """Authenticate user and return tokens. Returns None on bad credentials."""
        try:
            user = await self.user_repo.get_by_email(email)

            # Always verify so response time does not reveal whether the email exists
            password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
            password_valid = verify_password(password, password_hash)

            if user is None or not password_valid or not user.is_active:
                return None

            user.status = UserStatus.ONLINE.value
            user.last_seen_at = utc_now()
            tokens = self._issue_tokens(user.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User logged in", user_id=str(user.id))
        return tokens

    async def refresh_access_token(self, refresh_token: str) -> TokenResponse | None:
        """Rotate a refresh token: revoke it and issue a new pair.

        Returns None if the token is invalid, expired, revoked or not a refresh token.
        """
        payload = decode_token(refresh_token)
        if payload is None or payload.get("type") != REFRESH_TOKEN_TYPE:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        try:
            user_uuid = UUID(user_id)
        except ValueError:
            return None

        token_hash = hash_token(refresh_token)
        try:
            # Row lock: two parallel refreshes of one token cannot both succeed
            db_token = await self.token_repo.get_valid_by_hash(token_hash, for_update=True)
            if db_token is None or not hmac.compare_digest(token_hash, db_token.token_hash):
                return None

            user = await self.user_repo.get_by_id(user_uuid)
            if user is None or not user.is_active:
                return None

            db_token.revoked = True
            tokens = self._issue_tokens(user_uuid)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return tokens

    async def logout(self, refresh_token: str) -> bool:
        """Revoke a refresh token and mark its user OFFLINE. Returns False if unknown."""
        token_hash = hash_token(refresh_token)
        try:
            db_token = await self.token_repo.get_by_hash(token_hash)
            if db_token is None or not hmac.compare_digest(token_hash, db_token.token_hash):
                return False

            db_token.revoked = True
            user = await self.user_repo.get_by_id(db_token.user_id)
            if user is not None:
                user.status = UserStatus.OFFLINE.value
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User logged out", user_id=str(db_token.user_id))
        return True
