import pytest

from src.resovista.resovista.core.enums import AttendanceStatus
from src.resovista.resovista.core.exceptions import AuthorizationError, ValidationError


def _mark(container, actor, student_id, status="present", date="2024-01-10", class_id="math101"):
    return container.attendance_service.mark(
        actor, class_id=class_id, student_id=student_id, status=status, date=date
    )


def test_teacher_marks_attendance(container, teacher, student):
    record = _mark(container, teacher, student.id)

    assert record.status == AttendanceStatus.PRESENT
    assert record.marked_by == teacher.id
    assert container.attendance_service.get("math101", student.id, "2024-01-10") == record


def test_remarking_overwrites(container, teacher, student):
    _mark(container, teacher, student.id, status="present")
    _mark(container, teacher, student.id, status="late")

    records = container.attendance_service.list_for_class("math101")
    assert [r.status for r in records] == [AttendanceStatus.LATE]


def test_student_cannot_mark(container, student):
    with pytest.raises(AuthorizationError):
        _mark(container, student, student.id)


@pytest.mark.parametrize(
    "overrides",
    [{"status": "excused"}, {"date": "10/01/2024"}, {"class_id": "math:101"}, {"student_id": ""}],
)
def test_invalid_input(container, teacher, student, overrides):
    kwargs = {"student_id": student.id, **overrides}
    with pytest.raises(ValidationError):
        _mark(container, teacher, **kwargs)


def test_class_listing_does_not_leak_between_class_prefixes(container, teacher, student):
    _mark(container, teacher, student.id, class_id="math1")
    _mark(container, teacher, student.id, class_id="math10")

    assert len(container.attendance_service.list_for_class("math1")) == 1


def test_export_rows_sorted_by_date(container, teacher, student, other_student):
    _mark(container, teacher, student.id, date="2024-01-11")
    _mark(container, teacher, other_student.id, date="2024-01-10", status="absent")

    rows = container.attendance_service.export_rows("math101")
    assert [(r["date"], r["status"]) for r in rows] == [("2024-01-10", "absent"), ("2024-01-11", "present")]
    assert container.attendance_service.list_for_student(student.id)[0].date == "2024-01-11"
