from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import MAX_TAB_SWITCHES
from ..core.enums import ProctorAction, ProctorContext


@dataclass(frozen=True)
class ProctorDecision:
    action: ProctorAction
    count: int
    remaining: int

    def to_dict(self) -> dict:
        return {"action": self.action.value, "count": self.count, "remaining": self.remaining}


class TabSwitchMonitor:
    """Threshold counter over visibility-loss events.

    Each focus loss increments the counter. Below ``limit`` the caller should
    warn. Reaching ``limit`` during an exam forces auto-submission and closes
    the monitor; in a live class the monitor keeps counting and reports the
    limit on every further loss.
    """

    def __init__(self, context: ProctorContext, *, count: int = 0, limit: int = MAX_TAB_SWITCHES, closed: bool = False):
        if limit < 1:
            raise ValueError("limit must be positive")
        self.context = context
        self.count = count
        self.limit = limit
        self.closed = closed

    @property
    def remaining(self) -> int:
        return max(self.limit - self.count, 0)

    def record_focus_loss(self) -> ProctorDecision:
        if self.closed:
            return ProctorDecision(ProctorAction.NONE, self.count, self.remaining)

        self.count += 1
        if self.count < self.limit:
            return ProctorDecision(ProctorAction.WARN, self.count, self.remaining)

        if self.context == ProctorContext.EXAM:
            self.closed = True
            return ProctorDecision(ProctorAction.AUTO_SUBMIT, self.count, 0)
        return ProctorDecision(ProctorAction.LIMIT_REACHED, self.count, 0)
