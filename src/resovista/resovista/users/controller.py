from __future__ import annotations

from flask import Flask

from ..common.http import current_user, json_body, make_auth_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config["API_PREFIX"]
    auth_required = make_auth_required(container)

    @app.route(f"{prefix}/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        data = json_body()
        profile = container.auth_service.sign_up(
            email=data.get("email"),
            password=data.get("password"),
            name=data.get("name"),
            role=data.get("role"),
        )
        return ok(user={"id": profile.id, "email": profile.email, "name": profile.name, "role": profile.role.value})

    @app.route(f"{prefix}/auth/signin", methods=["POST"], endpoint="auth_signin")
    def signin():
        data = json_body()
        result = container.auth_service.sign_in(email=data.get("email"), password=data.get("password"))
        return ok(access_token=result.access_token, token_type=result.token_type, user=result.user)

    @app.route(f"{prefix}/auth/profile", methods=["GET"], endpoint="auth_profile")
    @auth_required
    def get_profile():
        return ok(user=container.auth_service.get_profile(current_user()))

    @app.route(f"{prefix}/auth/profile", methods=["PUT"], endpoint="auth_profile_update")
    @auth_required
    def update_profile():
        profile = container.auth_service.update_profile(current_user(), json_body())
        return ok(profile=profile.to_dict())
