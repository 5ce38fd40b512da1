"""Repository for Comment entity."""

from uuid import UUID

from sqlmodel import select

from src.scrum.models import Comment
from src.scrum.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    async def list_by_task(
        self, task_id: UUID, page: int, page_size: int
    ) -> tuple[list[Comment], int]:
        """List comments of a task, oldest first."""
        query = select(Comment).where(Comment.task_id == task_id)
        return await self.paginate(query, page, page_size, Comment.created_at)
