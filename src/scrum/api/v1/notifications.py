"""Notification inbox of the current user."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.scrum.api.dependencies import CurrentUser, NotificationServiceDep, Page
from src.scrum.schemas.notification import NotificationCount, NotificationRead
from src.scrum.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=PaginatedResponse[NotificationRead])
async def list_notifications(
    user: CurrentUser,
    page: Page,
    service: NotificationServiceDep,
    unread_only: Annotated[bool, Query()] = False,
) -> PaginatedResponse[NotificationRead]:
    """List notifications, newest first."""
    notifications, total = await service.list_for_user(
        user.id, unread_only, page.page, page.page_size
    )
    return PaginatedResponse.build(
        [NotificationRead.model_validate(n) for n in notifications], total, page.page, page.page_size
    )


@router.get("/count", response_model=NotificationCount)
async def count_notifications(user: CurrentUser, service: NotificationServiceDep) -> NotificationCount:
    total, unread = await service.count(user.id)
    return NotificationCount(total=total, unread=unread)


@router.patch("/read-all", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_read(user: CurrentUser, service: NotificationServiceDep) -> Response:
    await service.mark_all_read(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationRead,
    responses={404: {"description": "Not found"}},
)
async def mark_read(
    notification_id: UUID, user: CurrentUser, service: NotificationServiceDep
) -> NotificationRead:
    return NotificationRead.model_validate(await service.mark_read(notification_id, user.id))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_notifications(user: CurrentUser, service: NotificationServiceDep) -> Response:
    await service.delete_all(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Not found"}},
)
async def delete_notification(
    notification_id: UUID, user: CurrentUser, service: NotificationServiceDep
) -> Response:
    await service.delete(notification_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
