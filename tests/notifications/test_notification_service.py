import pytest

from src.resovista.resovista.core.enums import NotificationType, Priority
from src.resovista.resovista.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_send_defaults_and_read_flow(container, teacher, student):
    sent = container.notification_service.send(teacher, recipient_id=student.id, title="Hi", message="Lab at 2pm")
    assert sent.type == NotificationType.ANNOUNCEMENT
    assert sent.priority == Priority.NORMAL
    assert container.notification_service.unread_count(student) == 1

    read = container.notification_service.mark_read(student, sent.id)
    assert read.read is True
    assert read.read_at is not None
    assert container.notification_service.unread_count(student) == 0


def test_only_recipient_can_mark_read(container, teacher, student, other_student):
    sent = container.notification_service.send(teacher, recipient_id=student.id, title="Hi", message="x")
    with pytest.raises(NotFoundError):
        container.notification_service.mark_read(other_student, sent.id)


def test_list_is_newest_first(container, teacher, student):
    container.notification_service.send(teacher, recipient_id=student.id, title="first", message="x")
    container.notification_service.send(teacher, recipient_id=student.id, title="second", message="x")

    assert [n.title for n in container.notification_service.list_for(student)] == ["second", "first"]
    assert container.notification_service.mark_all_read(student) == 2
    assert container.notification_service.mark_all_read(student) == 0


def test_broadcast_to_students_only(container, admin, teacher, student, other_student):
    sent = container.notification_service.broadcast(
        admin, target="students", title="Campus closed", message="Online today", type="emergency", priority="urgent"
    )

    assert sorted(n.recipient_id for n in sent) == sorted([student.id, other_student.id])
    assert container.notification_service.list_for(teacher) == []
    assert sent[0].priority == Priority.URGENT


def test_broadcast_requires_staff(container, student):
    with pytest.raises(AuthorizationError):
        container.notification_service.broadcast(student, target="all", title="x", message="y")


def test_invalid_type(container, teacher, student):
    with pytest.raises(ValidationError):
        container.notification_service.send(teacher, recipient_id=student.id, title="x", message="y", type="spam")
