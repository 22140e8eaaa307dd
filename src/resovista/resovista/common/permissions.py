from __future__ import annotations

from typing import Iterable

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def ensure_role(user, allowed: Iterable[Role], message: str = "Forbidden") -> None:
    """Raise AuthorizationError unless ``user.role`` is one of ``allowed``."""
    if user.role not in set(allowed):
        raise AuthorizationError(message)
