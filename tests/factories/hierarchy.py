"""Factories for workspaces, spaces, projects, their memberships and labels."""

from polyfactory import Use

from src.scrum.models import (
    Label,
    Project,
    ProjectMember,
    ProjectRole,
    Space,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
)
from tests.factories.base import BaseFactory, generate_uuid, short_id, utc_now


class WorkspaceFactory(BaseFactory):
    __model__ = Workspace

    id = Use(generate_uuid)
    name = Use(lambda: f"Workspace {short_id()}")
    description = None
    icon = None
    color = None
    owner_id = None  # Required FK - must be set explicitly
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class WorkspaceMemberFactory(BaseFactory):
    __model__ = WorkspaceMember

    id = Use(generate_uuid)
    workspace_id = None
    user_id = None
    role = WorkspaceRole.MEMBER.value
    joined_at = Use(utc_now)

    @classmethod
    def owner(cls, **kwargs):
        return cls.build(role=WorkspaceRole.OWNER.value, **kwargs)


class SpaceFactory(BaseFactory):
    __model__ = Space

    id = Use(generate_uuid)
    name = Use(lambda: f"Space {short_id()}")
    description = None
    icon = None
    color = None
    workspace_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectFactory(BaseFactory):
    __model__ = Project

    id = Use(generate_uuid)
    name = Use(lambda: f"Project {short_id()}")
    key = "SCR"
    description = None
    icon = None
    color = None
    space_id = None
    lead_id = None
    task_sequence = 0
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectMemberFactory(BaseFactory):
    __model__ = ProjectMember

    id = Use(generate_uuid)
    project_id = None
    user_id = None
    role = ProjectRole.MEMBER.value
    joined_at = Use(utc_now)

    @classmethod
    def lead(cls, **kwargs):
        return cls.build(role=ProjectRole.LEAD.value, **kwargs)

    @classmethod
    def viewer(cls, **kwargs):
        return cls.build(role=ProjectRole.VIEWER.value, **kwargs)


class LabelFactory(BaseFactory):
    __model__ = Label

    id = Use(generate_uuid)
    project_id = None
    name = Use(lambda: f"label-{short_id()}")
    color = "#6B7280"
    created_at = Use(utc_now)
