import pytest

from src.resovista.resovista.core.enums import ProctorAction, ProctorContext
from src.resovista.resovista.exams.proctoring import TabSwitchMonitor


def test_exam_warns_then_auto_submits_on_third_loss():
    monitor = TabSwitchMonitor(ProctorContext.EXAM)

    actions = [monitor.record_focus_loss() for _ in range(4)]

    assert [(d.action, d.count, d.remaining) for d in actions] == [
        (ProctorAction.WARN, 1, 2),
        (ProctorAction.WARN, 2, 1),
        (ProctorAction.AUTO_SUBMIT, 3, 0),
        (ProctorAction.NONE, 3, 0),
    ]
    assert monitor.closed


def test_live_class_keeps_reporting_limit():
    monitor = TabSwitchMonitor(ProctorContext.LIVE_CLASS, count=2)

    assert monitor.record_focus_loss().action == ProctorAction.LIMIT_REACHED
    assert monitor.record_focus_loss().action == ProctorAction.LIMIT_REACHED
    assert monitor.count == 4


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        TabSwitchMonitor(ProctorContext.EXAM, limit=0)
