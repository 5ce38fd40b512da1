"""Repository for RefreshToken entity."""

from datetime import timedelta

from sqlalchemy import and_, delete, or_
from sqlmodel import select

from src.scrum.models import RefreshToken
from src.scrum.models.base import utc_now
from src.scrum.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    model = RefreshToken

    async def get_by_hash(self, token_hash: str) -> RefreshToken | None:
        """Get refresh token by its hash."""
        result = await self.session.execute(
            select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def get_valid_by_hash(
        self, token_hash: str, for_update: bool = False
    ) -> RefreshToken | None:
        """Get a valid (non-revoked, non-expired) refresh token by hash.

        Args:
            token_hash: The hashed token to look up
            for_update: If True, locks the row so two concurrent refreshes
                       cannot both rotate the same token
        """
        query = select(RefreshToken).where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.revoked == False,  # noqa: E712
            RefreshToken.expires_at > utc_now(),
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def cleanup_expired(self, retention_days: int) -> int:
        """Delete tokens expired, or revoked, more than retention_days ago."""
        cutoff = utc_now() - timedelta(days=retention_days)
        stmt = delete(RefreshToken).where(
            or_(
                RefreshToken.expires_at < cutoff,  # type: ignore[arg-type]
                and_(
                    RefreshToken.revoked == True,  # type: ignore[arg-type]  # noqa: E712
                    RefreshToken.created_at < cutoff,  # type: ignore[arg-type]
                ),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
