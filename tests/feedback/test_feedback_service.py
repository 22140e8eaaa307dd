import pytest

from src.resovista.resovista.core.exceptions import AuthorizationError, ValidationError


def test_submit_and_admin_lists(container, student, admin):
    feedback = container.feedback_service.submit(
        student, {"subject": "Labs", "message": "More labs please", "rating": 5, "category": "content"}
    )
    assert feedback.user_id == student.id
    assert feedback.extra == {"category": "content"}

    assert [f.id for f in container.feedback_service.list_all(admin)] == [feedback.id]


def test_only_admins_list(container, teacher):
    with pytest.raises(AuthorizationError, match="Admin access required"):
        container.feedback_service.list_all(teacher)


@pytest.mark.parametrize(
    "payload",
    [{"subject": "x"}, {"message": "x"}, {"subject": "x", "message": "y", "rating": 6}, {"subject": "x", "message": "y", "rating": "5"}],
)
def test_submit_validation(container, student, payload):
    with pytest.raises(ValidationError):
        container.feedback_service.submit(student, payload)
