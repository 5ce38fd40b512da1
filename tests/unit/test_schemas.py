"""Validation rules of request schemas."""

from datetime import UTC, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from src.scrum.schemas import (
    BulkTaskUpdateItem,
    CommentCreate,
    LabelUpdate,
    PaginatedResponse,
    ProjectCreate,
    ProjectUpdate,
    SpaceUpdate,
    SprintComplete,
    SprintCreate,
    TaskCreate,
    TaskReorderRequest,
    TaskUpdate,
    WorkspaceUpdate,
)

pytestmark = pytest.mark.unit

valid_key = st.from_regex(r"^[A-Za-z][A-Za-z0-9]{1,9}$", fullmatch=True)


class TestProjectKey:
    @given(key=valid_key)
    @settings(max_examples=100)
    def test_valid_keys_upper_cased(self, key: str):
        project = ProjectCreate(name="Apollo", key=key)
        assert project.key == key.upper()

    @given(key=st.from_regex(r"^[0-9][A-Z0-9]{1,9}$", fullmatch=True))
    def test_digit_start_rejected(self, key: str):
        with pytest.raises(ValidationError) as exc_info:
            ProjectCreate(name="Apollo", key=key)
        assert any(error["loc"] == ("key",) for error in exc_info.value.errors())

    @pytest.mark.parametrize("key", ["A", "ABCDEFGHIJK", "AB-C", "AB C", "ÄBC"])
    def test_malformed_keys_rejected(self, key: str):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Apollo", key=key)

    def test_name_is_stripped(self):
        assert ProjectCreate(name="  Apollo  ", key="apo").name == "Apollo"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="   ", key="APO")


class TestTaskSchemas:
    def test_create_defaults(self):
        task = TaskCreate(title="Write tests")
        assert task.status.value == "BACKLOG"
        assert task.priority.value == "MEDIUM"
        assert task.type.value == "TASK"
        assert task.label_ids == []

    def test_aware_due_date_becomes_naive_utc(self):
        due = datetime(2026, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        task = TaskCreate(title="Deploy", due_date=due)
        assert task.due_date == datetime(2026, 5, 1, 10, 0)
        assert task.due_date.tzinfo is None

    def test_update_tracks_explicit_nulls(self):
        update = TaskUpdate.model_validate({"sprint_id": None})
        assert update.model_fields_set == {"sprint_id"}

    @pytest.mark.parametrize("field", ["status", "priority", "type", "title", "order_index"])
    def test_update_rejects_null_for_required_fields(self, field: str):
        with pytest.raises(ValidationError):
            TaskUpdate.model_validate({field: None})

    def test_reorder_rejects_duplicates(self):
        task_id = uuid4()
        with pytest.raises(ValidationError):
            TaskReorderRequest(task_ids=[task_id, task_id])

    def test_bulk_item_negative_order_rejected(self):
        with pytest.raises(ValidationError):
            BulkTaskUpdateItem(id=uuid4(), order_index=-1)


class TestSprintSchemas:
    def test_end_before_start_rejected(self):
        start = datetime.now(UTC)
        with pytest.raises(ValidationError):
            SprintCreate(name="S1", start_date=start, end_date=start - timedelta(days=1))

    def test_complete_defaults_to_backlog(self):
        assert SprintComplete().move_incomplete_to == "backlog"

    def test_complete_accepts_sprint_id(self):
        target = uuid4()
        assert SprintComplete(move_incomplete_to=str(target)).move_incomplete_to == target

    def test_complete_rejects_other_words(self):
        with pytest.raises(ValidationError):
            SprintComplete(move_incomplete_to="archive")


def test_blank_comment_rejected():
    with pytest.raises(ValidationError):
        CommentCreate(content="   ")


@pytest.mark.parametrize(
    ("total", "page", "page_size", "has_more"),
    [(0, 1, 20, False), (20, 1, 20, False), (21, 1, 20, True), (45, 2, 20, True), (45, 3, 20, False)],
)
def test_paginated_response_has_more(total, page, page_size, has_more):
    response = PaginatedResponse[int].build([], total, page, page_size)
    assert response.has_more is has_more


class TestContainerUpdates:
    @pytest.mark.parametrize(
        ("schema", "field"),
        [
            (WorkspaceUpdate, "name"),
            (SpaceUpdate, "name"),
            (ProjectUpdate, "name"),
            (ProjectUpdate, "key"),
            (LabelUpdate, "name"),
            (LabelUpdate, "color"),
        ],
    )
    def test_null_rejected_for_required_columns(self, schema, field: str):
        with pytest.raises(ValidationError) as exc_info:
            schema.model_validate({field: None})
        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_nullable_columns_can_be_cleared(self):
        update = ProjectUpdate.model_validate({"icon": None, "lead_id": None})
        assert update.model_fields_set == {"icon", "lead_id"}

    def test_omitted_fields_stay_unset(self):
        assert WorkspaceUpdate().model_fields_set == set()
