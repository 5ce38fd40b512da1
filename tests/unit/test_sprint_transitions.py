"""Property-based tests for the sprint state machine."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.scrum.core.exceptions import InvalidTransitionError
from src.scrum.models import SprintStatus
from src.scrum.services.sprint_service import check_transition

pytestmark = pytest.mark.unit

ALLOWED = {
    (SprintStatus.PLANNING, SprintStatus.ACTIVE),
    (SprintStatus.ACTIVE, SprintStatus.COMPLETED),
}


def test_forward_transitions_allowed():
    check_transition(SprintStatus.PLANNING.value, SprintStatus.ACTIVE)
    check_transition(SprintStatus.ACTIVE.value, SprintStatus.COMPLETED)


@given(current=st.sampled_from(SprintStatus), target=st.sampled_from(SprintStatus))
def test_only_forward_single_steps(current: SprintStatus, target: SprintStatus):
    """Every pair outside PLANNING->ACTIVE and ACTIVE->COMPLETED is rejected."""
    if (current, target) in ALLOWED:
        check_transition(current.value, target)
    else:
        with pytest.raises(InvalidTransitionError):
            check_transition(current.value, target)


def test_error_names_both_states():
    with pytest.raises(InvalidTransitionError) as exc_info:
        check_transition(SprintStatus.COMPLETED.value, SprintStatus.ACTIVE)
    assert exc_info.value.detail == "Cannot move sprint from COMPLETED to ACTIVE"
    assert exc_info.value.status_code == 409
