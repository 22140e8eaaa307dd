import pytest

from src.resovista.resovista.core.enums import NotificationType, ProctorAction, ProctorStatus, SubmitReason
from src.resovista.resovista.core.exceptions import NotFoundError


@pytest.fixture
def exam(container, teacher):
    return container.exam_service.create(
        teacher, {"title": "Quiz", "questions": [{"id": "q1", "correctAnswer": "4"}]}
    )


def test_third_tab_switch_auto_submits_exam(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)

    first = proctor.report_exam_visibility(student, exam.id, hidden=True, answers={"q1": "4"})
    second = proctor.report_exam_visibility(student, exam.id, hidden=True, answers={"q1": "4"})
    third = proctor.report_exam_visibility(student, exam.id, hidden=True, answers={"q1": "4"}, time_spent=42)

    assert [o.decision.action for o in (first, second, third)] == [
        ProctorAction.WARN,
        ProctorAction.WARN,
        ProctorAction.AUTO_SUBMIT,
    ]
    assert third.session.status == ProctorStatus.AUTO_SUBMITTED
    assert third.submission.submit_reason == SubmitReason.TAB_SWITCH_LIMIT
    assert third.submission.percentage == 100.0

    after = proctor.report_exam_visibility(student, exam.id, hidden=True)
    assert after.decision.action == ProctorAction.NONE
    assert after.session.tab_switches == 3


def test_visible_events_do_not_count(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)

    outcome = proctor.report_exam_visibility(student, exam.id, hidden=False)
    assert outcome.decision.action == ProctorAction.NONE
    assert outcome.session.tab_switches == 0


def test_restart_resets_counter(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)
    proctor.report_exam_visibility(student, exam.id, hidden=True)
    proctor.start_exam(student, exam.id)

    assert proctor.report_exam_visibility(student, exam.id, hidden=True).decision.count == 1


def test_manual_submit_closes_exam_session(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)
    container.exam_service.submit(student, exam.id, answers={"q1": "4"})

    outcomes = [proctor.report_exam_visibility(student, exam.id, hidden=True, answers={}) for _ in range(3)]

    assert [o.decision.action for o in outcomes] == [ProctorAction.NONE] * 3
    assert outcomes[-1].session.status == ProctorStatus.SUBMITTED
    assert outcomes[-1].session.tab_switches == 0
    kept = container.exam_service.get_result(student, exam.id, student.id)
    assert kept.percentage == 100.0
    assert kept.submit_reason == SubmitReason.MANUAL


def test_time_up_submit_closes_exam_session(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)
    proctor.report_exam_visibility(student, exam.id, hidden=True)
    container.exam_service.submit(student, exam.id, answers={"q1": "4"}, reason=SubmitReason.TIME_UP)

    for _ in range(3):
        assert proctor.report_exam_visibility(student, exam.id, hidden=True).decision.action == ProctorAction.NONE
    assert container.exam_service.get_result(student, exam.id, student.id).submit_reason == SubmitReason.TIME_UP


def test_restart_after_submit_is_monitored_again(container, exam, student):
    proctor = container.proctoring_service
    proctor.start_exam(student, exam.id)
    container.exam_service.submit(student, exam.id, answers={"q1": "4"})
    proctor.start_exam(student, exam.id)

    outcome = proctor.report_exam_visibility(student, exam.id, hidden=True)
    assert outcome.decision.action == ProctorAction.WARN
    assert outcome.session.status == ProctorStatus.ACTIVE


def test_events_without_session_are_ignored(container, exam, student):
    outcome = container.proctoring_service.report_exam_visibility(student, exam.id, hidden=True)
    assert outcome.decision.action == ProctorAction.NONE
    assert outcome.session is None


def test_start_unknown_exam(container, student):
    with pytest.raises(NotFoundError):
        container.proctoring_service.start_exam(student, "exam:404")


def test_live_class_notifies_teacher_once(container, teacher, student):
    proctor = container.proctoring_service
    outcomes = [
        proctor.report_live_class_visibility(student, "physics", hidden=True, teacher_id=teacher.id)
        for _ in range(4)
    ]

    assert [o.decision.action for o in outcomes] == [
        ProctorAction.WARN,
        ProctorAction.WARN,
        ProctorAction.LIMIT_REACHED,
        ProctorAction.LIMIT_REACHED,
    ]
    assert outcomes[-1].session.status == ProctorStatus.LIMIT_REACHED

    alerts = container.notification_service.list_for(teacher)
    assert len(alerts) == 1
    assert alerts[0].type == NotificationType.ALERT
    assert alerts[0].sender_id == student.id
