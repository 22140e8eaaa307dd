from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/chat/send", methods=["POST"], endpoint="chat_send")
    @auth_required
    def send():
        data = json_body()
        message = container.chat_service.send(
            current_user(),
            recipient_id=data.get("recipientId"),
            message=data.get("message"),
            type=data.get("type"),
        )
        return ok(message=message.to_dict())

    @app.route(f"{prefix}/chat/<other_user_id>", methods=["GET"], endpoint="chat_conversation")
    @auth_required
    def conversation(other_user_id: str):
        messages = container.chat_service.conversation(current_user(), other_user_id)
        return ok(messages=[m.to_dict() for m in messages])
