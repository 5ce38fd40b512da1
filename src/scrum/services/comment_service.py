"""Comment service. Only a comment's author may edit or delete it."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import NotFoundError, UnauthorizedError
from src.scrum.core.logging import get_logger
from src.scrum.models import Comment, Task
from src.scrum.repositories import CommentRepository
from src.scrum.schemas.comment import CommentCreate, CommentUpdate
from src.scrum.services.common import apply_updates
from src.scrum.services.events import NotificationDispatcher, TaskCommented

logger = get_logger(__name__)


class CommentService:
    def __init__(
        self,
        comment_repo: CommentRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        self.comment_repo = comment_repo
        self.session = session
        self.dispatcher = dispatcher

    async def create(self, task: Task, author_id: UUID, data: CommentCreate) -> Comment:
        try:
            comment = Comment(task_id=task.id, author_id=author_id, content=data.content)
            self.comment_repo.add(comment)
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment created", comment_id=str(comment.id), task_id=str(task.id))
        await self.dispatcher.dispatch(
            [
                TaskCommented(
                    task_id=task.id,
                    task_title=task.title,
                    project_id=task.project_id,
                    comment_id=comment.id,
                    commenter_id=author_id,
                    assignee_id=task.assignee_id,
                    reporter_id=task.reporter_id,
                )
            ]
        )
        return comment

    async def get(self, comment_id: UUID) -> Comment:
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError.for_entity("Comment", comment_id)
        return comment

    async def list_by_task(
        self, task_id: UUID, page: int, page_size: int
    ) -> tuple[list[Comment], int]:
        return await self.comment_repo.list_by_task(task_id, page, page_size)

    def _check_author(self, comment: Comment, user_id: UUID) -> None:
        if comment.author_id != user_id:
            raise UnauthorizedError("Only the author can modify this comment")

    async def update(self, comment: Comment, user_id: UUID, data: CommentUpdate) -> Comment:
        """Edit a comment. Raises UnauthorizedError for anyone but the author."""
        self._check_author(comment, user_id)
        try:
            apply_updates(comment, data)
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise
        return comment

    async def delete(self, comment: Comment, user_id: UUID) -> None:
        self._check_author(comment, user_id)
        try:
            await self.comment_repo.delete(comment)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Comment deleted", comment_id=str(comment.id))
