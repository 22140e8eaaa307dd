from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/notifications/send", methods=["POST"], endpoint="notifications_send")
    @auth_required
    def send():
        data = json_body()
        notification = container.notification_service.send(
            current_user(),
            recipient_id=data.get("recipientId"),
            title=data.get("title"),
            message=data.get("message"),
            type=data.get("type"),
            priority=data.get("priority"),
        )
        return ok(notification=notification.to_dict())

    @app.route(f"{prefix}/notifications/broadcast", methods=["POST"], endpoint="notifications_broadcast")
    @auth_required
    def broadcast():
        data = json_body()
        sent = container.notification_service.broadcast(
            current_user(),
            target=data.get("target"),
            title=data.get("title"),
            message=data.get("message"),
            type=data.get("type"),
            priority=data.get("priority"),
        )
        return ok(sent=len(sent), notifications=[n.to_dict() for n in sent])

    @app.route(f"{prefix}/notifications", methods=["GET"], endpoint="notifications_list")
    @auth_required
    def list_notifications():
        items = container.notification_service.list_for(current_user())
        return ok(notifications=[n.to_dict() for n in items])

    @app.route(f"{prefix}/notifications/unread-count", methods=["GET"], endpoint="notifications_unread")
    @auth_required
    def unread_count():
        return ok(unread=container.notification_service.unread_count(current_user()))

    @app.route(f"{prefix}/notifications/read-all", methods=["PUT"], endpoint="notifications_read_all")
    @auth_required
    def mark_all_read():
        return ok(updated=container.notification_service.mark_all_read(current_user()))

    @app.route(f"{prefix}/notifications/<notification_id>/read", methods=["PUT"], endpoint="notifications_read")
    @auth_required
    def mark_read(notification_id: str):
        notification = container.notification_service.mark_read(current_user(), notification_id)
        return ok(notification=notification.to_dict())
