from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import Clock, now_utc, to_iso, to_millis
from ..common.permissions import ensure_role
from ..common.validators import require_fields, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import CurrentUser
from .model import Feedback
from .repository import FeedbackRepository


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository, *, clock: Clock = now_utc):
        self._feedback = feedback
        self._clock = clock

    def submit(self, user: CurrentUser, data: Mapping[str, Any]) -> Feedback:
        if not isinstance(data, Mapping):
            raise ValidationError("Feedback must be a JSON object")
        require_fields(data, "subject", "message", message="Subject and message are required")

        rating = data.get("rating")
        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
                raise ValidationError("rating must be an integer from 1 to 5")

        now = self._clock()
        feedback = Feedback(
            id=f"feedback:{to_millis(now)}",
            user_id=user.id,
            subject=require_non_empty(data.get("subject"), "subject"),
            message=require_non_empty(data.get("message"), "message"),
            created_at=to_iso(now),
            rating=rating,
            extra={k: v for k, v in data.items() if k not in ("id", "userId", "subject", "message", "rating", "createdAt")},
        )
        self._feedback.save(feedback)
        return feedback

    def list_all(self, user: CurrentUser) -> Sequence[Feedback]:
        ensure_role(user, (Role.ADMIN,), "Admin access required")
        return self._feedback.list_all()
