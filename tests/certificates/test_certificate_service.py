import pytest

from src.resovista.resovista.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _issue(container, actor, student_id, **overrides):
    kwargs = dict(student_id=student_id, lab_name="Titration", score=92, completion_date="2024-01-09")
    kwargs.update(overrides)
    return container.certificate_service.issue(actor, **kwargs)


def test_issue_and_verify(container, teacher, student):
    certificate = _issue(container, teacher, student.id)

    assert certificate.certificate_number.startswith("RESOVISTA-")
    assert certificate.id == f"certificate:{student.id}:{certificate.certificate_number.split('-', 1)[1]}"
    assert container.certificate_service.verify(certificate.certificate_number) == certificate
    assert container.certificate_service.list_for_student(student.id) == [certificate]


def test_verify_unknown_number(container):
    with pytest.raises(NotFoundError):
        container.certificate_service.verify("RESOVISTA-0")


def test_students_cannot_issue(container, student):
    with pytest.raises(AuthorizationError):
        _issue(container, student, student.id)


@pytest.mark.parametrize("overrides", [{"lab_name": ""}, {"score": None}, {"score": -5}, {"completion_date": "yesterday"}])
def test_issue_validation(container, teacher, student, overrides):
    with pytest.raises(ValidationError):
        _issue(container, teacher, student.id, **overrides)


def test_qr_code_is_png(container, teacher, student):
    certificate = _issue(container, teacher, student.id)

    png = container.certificate_service.qr_png(certificate.id)
    assert png.startswith(b"\x89PNG")

    with pytest.raises(NotFoundError):
        container.certificate_service.qr_png("certificate:nobody:1")
