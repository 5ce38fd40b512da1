"""Project and label services."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import AlreadyExistsError, InvalidOperationError, NotFoundError
from src.scrum.core.logging import get_logger
from src.scrum.models import Label, Project, ProjectMember, ProjectRole
from src.scrum.repositories import (
    CascadeRepository,
    LabelRepository,
    ProjectMemberRepository,
    ProjectRepository,
    UserRepository,
)
from src.scrum.schemas.project import LabelCreate, LabelUpdate, ProjectCreate, ProjectUpdate
from src.scrum.services.common import apply_updates
from src.scrum.services.events import MemberAdded, NotificationDispatcher

logger = get_logger(__name__)


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: ProjectMemberRepository,
        user_repo: UserRepository,
        cascade_repo: CascadeRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.user_repo = user_repo
        self.cascade_repo = cascade_repo
        self.session = session
        self.dispatcher = dispatcher

    async def _ensure_user(self, user_id: UUID | None) -> None:
        if user_id is not None and await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError.for_entity("User", user_id)

    async def create(self, space_id: UUID, creator_id: UUID, data: ProjectCreate) -> Project:
        """Create a project under a space.

        The creator becomes a LEAD member, and so does a distinct lead if given.

        Raises:
            AlreadyExistsError: If the key is already used in this space
        """
        if await self.project_repo.get_by_key(space_id, data.key) is not None:
            raise AlreadyExistsError(f"Project with key '{data.key}' already exists in this space")
        await self._ensure_user(data.lead_id)

        lead_id = data.lead_id or creator_id
        try:
            project = Project(space_id=space_id, **data.model_dump(exclude={"lead_id"}), lead_id=lead_id)
            self.project_repo.add(project)
            await self.session.flush()
            for user_id in dict.fromkeys([creator_id, lead_id]):
                self.member_repo.add(
                    ProjectMember(project_id=project.id, user_id=user_id, role=ProjectRole.LEAD.value)
                )
            await self.session.commit()
            await self.session.refresh(project)
        except IntegrityError as e:
            await self.session.rollback()
            raise AlreadyExistsError(
                f"Project with key '{data.key}' already exists in this space"
            ) from e
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create project", error=str(e))
            raise

        logger.info("Project created", project_id=str(project.id), key=project.key)
        if lead_id != creator_id:
            await self.dispatcher.dispatch([self._invitation(project, lead_id)])
        return project

    @staticmethod
    def _invitation(project: Project, user_id: UUID) -> MemberAdded:
        return MemberAdded(
            scope="project", scope_id=project.id, scope_name=project.name, user_id=user_id
        )

    async def _make_lead_member(self, project: Project, user_id: UUID) -> bool:
        """Give the lead a LEAD membership. Returns True if the user was not a member yet."""
        member = await self.member_repo.get_member(project.id, user_id)
        if member is None:
            self.member_repo.add(
                ProjectMember(project_id=project.id, user_id=user_id, role=ProjectRole.LEAD.value)
            )
            return True
        member.role = ProjectRole.LEAD.value
        return False

    async def get(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError.for_entity("Project", project_id)
        return project

    async def list_by_space(
        self, space_id: UUID, page: int, page_size: int
    ) -> tuple[list[Project], int]:
        return await self.project_repo.list_by_space(space_id, page, page_size)

    async def update(self, project: Project, data: ProjectUpdate) -> Project:
        """Apply a partial update.

        The key is frozen once a task has been created. A new lead becomes a
        LEAD member of the project and is invited if they were not a member.
        """
        if data.key is not None and data.key != project.key:
            if project.task_sequence > 0:
                raise InvalidOperationError("Project key cannot change after tasks were created")
            if await self.project_repo.get_by_key(project.space_id, data.key) is not None:
                raise AlreadyExistsError(
                    f"Project with key '{data.key}' already exists in this space"
                )
        new_lead = data.lead_id if "lead_id" in data.model_fields_set else None
        if new_lead == project.lead_id:
            new_lead = None
        await self._ensure_user(new_lead)

        invited = False
        try:
            apply_updates(project, data)
            if new_lead is not None:
                invited = await self._make_lead_member(project, new_lead)
            await self.session.commit()
            await self.session.refresh(project)
        except IntegrityError as e:
            await self.session.rollback()
            raise AlreadyExistsError(f"Project with key '{data.key}' already exists") from e
        except Exception:
            await self.session.rollback()
            raise

        if invited:
            await self.dispatcher.dispatch([self._invitation(project, new_lead)])  # type: ignore[arg-type]
        return project

    async def delete(self, project_id: UUID) -> None:
        """Delete a project with its tasks, sprints, labels and members in one transaction."""
        try:
            counts = await self.cascade_repo.delete_projects([project_id])
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete project", project_id=str(project_id), error=str(e))
            raise

        logger.info("Project deleted", project_id=str(project_id), **counts)


class LabelService:
    def __init__(self, label_repo: LabelRepository, session: AsyncSession):
        self.label_repo = label_repo
        self.session = session

    async def create(self, project_id: UUID, data: LabelCreate) -> Label:
        try:
            label = Label(project_id=project_id, **data.model_dump())
            self.label_repo.add(label)
            await self.session.commit()
            await self.session.refresh(label)
        except Exception:
            await self.session.rollback()
            raise
        return label

    async def list_by_project(self, project_id: UUID) -> list[Label]:
        return await self.label_repo.list_by_project(project_id)

    async def update(self, label: Label, data: LabelUpdate) -> Label:
        try:
            apply_updates(label, data)
            await self.session.commit()
            await self.session.refresh(label)
        except Exception:
            await self.session.rollback()
            raise
        return label

    async def delete(self, label_id: UUID) -> None:
        """Delete a label; tasks keep existing without it."""
        try:
            await self.label_repo.delete_with_links(label_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
