"""Label endpoints."""

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import LabelServiceDep, WritableLabel
from src.scrum.schemas.project import LabelRead, LabelUpdate

router = APIRouter(prefix="/labels", tags=["labels"])


@router.patch("/{label_id}", response_model=LabelRead)
async def update_label(data: LabelUpdate, label: WritableLabel, service: LabelServiceDep) -> LabelRead:
    return LabelRead.model_validate(await service.update(label, data))


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(label: WritableLabel, service: LabelServiceDep) -> Response:
    """Delete a label and remove it from every task."""
    await service.delete(label.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
