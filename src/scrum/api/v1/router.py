from fastapi import APIRouter

from src.scrum.api.v1 import (
    auth,
    comments,
    labels,
    notifications,
    projects,
    sprints,
    spaces,
    tasks,
    users,
    workspaces,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(workspaces.router)
api_router.include_router(spaces.router)
api_router.include_router(projects.router)
api_router.include_router(sprints.router)
api_router.include_router(tasks.router)
api_router.include_router(comments.router)
api_router.include_router(labels.router)
api_router.include_router(notifications.router)
