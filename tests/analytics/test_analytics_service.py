import pytest

from src.resovista.resovista.core.exceptions import AuthorizationError


def test_student_analytics(container, teacher, student, other_student):
    container.marks_service.add(teacher, student_id=student.id, subject="math", marks=80, max_marks=100)
    container.marks_service.add(teacher, student_id=student.id, subject="bio", marks=30, max_marks=50)
    for date, status in [("2024-01-08", "present"), ("2024-01-09", "absent"), ("2024-01-10", "present"), ("2024-01-11", "late")]:
        container.attendance_service.mark(teacher, class_id="math101", student_id=student.id, status=status, date=date)
    container.attendance_service.mark(teacher, class_id="math101", student_id=other_student.id, status="present", date="2024-01-08")
    container.certificate_service.issue(
        teacher, student_id=student.id, lab_name="Optics", score=88, completion_date="2024-01-10"
    )

    analytics = container.analytics_service.for_student(student.id).to_dict()

    assert analytics == {
        "totalMarks": 2,
        "averageScore": 70.0,
        "attendanceRecords": 4,
        "attendancePercentage": 50.0,
        "certificatesEarned": 1,
    }


def test_empty_student_analytics(container):
    analytics = container.analytics_service.for_student("ghost")
    assert analytics.average_score == 0.0
    assert analytics.attendance_percentage == 0.0


def test_class_analytics(container, teacher, student, other_student):
    for sid, date, status in [
        (student.id, "2024-01-08", "present"),
        (student.id, "2024-01-09", "present"),
        (other_student.id, "2024-01-08", "absent"),
        (other_student.id, "2024-01-09", "present"),
    ]:
        container.attendance_service.mark(teacher, class_id="bio", student_id=sid, status=status, date=date)

    analytics = container.analytics_service.for_class(teacher, "bio")
    assert (analytics.total_students, analytics.total_classes, analytics.average_attendance) == (2, 2, 75.0)
    assert container.analytics_service.for_class(teacher, "empty").average_attendance == 0.0


def test_class_analytics_is_staff_only(container, student):
    with pytest.raises(AuthorizationError):
        container.analytics_service.for_class(student, "bio")
