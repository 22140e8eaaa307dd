from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/todos/create", methods=["POST"], endpoint="todos_create")
    @auth_required
    def create():
        return ok(todo=container.todo_service.create(current_user(), json_body()).to_dict())

    @app.route(f"{prefix}/todos", methods=["GET"], endpoint="todos_list")
    @auth_required
    def list_todos():
        return ok(todos=[t.to_dict() for t in container.todo_service.list_for(current_user())])

    @app.route(f"{prefix}/todos/<todo_id>", methods=["PUT"], endpoint="todos_update")
    @auth_required
    def update(todo_id: str):
        todo = container.todo_service.update(current_user(), todo_id, json_body())
        return ok(todo=todo.to_dict())

    @app.route(f"{prefix}/todos/<todo_id>", methods=["DELETE"], endpoint="todos_delete")
    @auth_required
    def delete(todo_id: str):
        container.todo_service.delete(current_user(), todo_id)
        return ok()
