"""Comment endpoints. Only the author may edit or delete a comment."""

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import CommentServiceDep, CurrentUser, ReadableComment
from src.scrum.schemas.comment import CommentRead, CommentUpdate

router = APIRouter(prefix="/comments", tags=["comments"])


@router.patch(
    "/{comment_id}",
    response_model=CommentRead,
    responses={403: {"description": "Not the author"}, 404: {"description": "Not found"}},
)
async def update_comment(
    data: CommentUpdate, comment: ReadableComment, user: CurrentUser, service: CommentServiceDep
) -> CommentRead:
    return CommentRead.model_validate(await service.update(comment, user.id, data))


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Not the author"}, 404: {"description": "Not found"}},
)
async def delete_comment(
    comment: ReadableComment, user: CurrentUser, service: CommentServiceDep
) -> Response:
    await service.delete(comment, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
