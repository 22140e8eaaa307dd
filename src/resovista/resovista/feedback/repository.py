from __future__ import annotations

from typing import Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def save(self, feedback: Feedback) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[Feedback]:
        raise NotImplementedError
