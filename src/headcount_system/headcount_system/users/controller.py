from __future__ import annotations

from flask import Flask, g, session

from ..common.web import admin_required, fail, json_body, login_required, ok, session_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login = login_required(container)
    admin = admin_required(container)

    @app.get("/api/setup", endpoint="setup_status")
    def setup_status():
        return ok(needsSetup=container.user_service.needs_first_admin())

    @app.post("/api/setup", endpoint="setup")
    def setup():
        data = json_body()
        password = data.get("password") or ""
        if "confirm" in data and data.get("confirm") != password:
            return fail("Passwords do not match", 400)
        user = container.user_service.create_first_admin(
            username=str(data.get("username") or ""),
            password=str(password),
        )
        return ok(user=user.to_public_dict()), 201

    @app.post("/api/login", endpoint="login")
    def login_view():
        data = json_body()
        user = container.auth_service.login(str(data.get("username") or ""), str(data.get("password") or ""))
        expires_at = container.auth_service.current_session().expires_at
        session.clear()
        session["username"] = user.username
        session["expires_at"] = expires_at
        return ok(user=user.to_public_dict(), expiresAt=expires_at)

    @app.post("/api/logout", endpoint="logout")
    def logout():
        # Only the client that holds the login may end it.
        if session_user(container):
            container.auth_service.logout()
        session.clear()
        return ok()

    @app.get("/api/me", endpoint="me")
    @login
    def me():
        user = g.current_user
        return ok(user=user.to_public_dict(), areas=list(container.area_service.visible_areas(user)))

    @app.get("/api/admin/users", endpoint="admin_users")
    @admin
    def admin_users():
        return ok(users=[u.to_public_dict() for u in container.user_service.list_users()])

    @app.post("/api/admin/users", endpoint="add_user")
    @admin
    def add_user():
        data = json_body()
        user, temp_password = container.user_service.create_account(
            current_role=g.current_user.role,
            username=str(data.get("username") or ""),
            role=data.get("role") or "user",
            assigned_areas=data.get("assignedAreas") or [],
        )
        return ok(user=user.to_public_dict(), tempPassword=temp_password), 201

    @app.post("/api/admin/users/<username>/reset-password", endpoint="reset_password")
    @admin
    def reset_password(username: str):
        temp_password = container.user_service.reset_password(current_role=g.current_user.role, username=username)
        return ok(username=username, tempPassword=temp_password)

    @app.post("/api/admin/users/<username>/toggle", endpoint="toggle_user")
    @admin
    def toggle_user(username: str):
        user = container.user_service.toggle_disabled(current_role=g.current_user.role, username=username)
        return ok(user=user.to_public_dict())

    @app.put("/api/admin/users/<username>/role", endpoint="set_user_role")
    @admin
    def set_user_role(username: str):
        data = json_body()
        user = container.user_service.set_role(
            current_role=g.current_user.role, username=username, role=data.get("role")
        )
        return ok(user=user.to_public_dict())

    @app.put("/api/admin/users/<username>/areas", endpoint="set_user_areas")
    @admin
    def set_user_areas(username: str):
        data = json_body()
        user = container.user_service.set_assigned_areas(
            current_role=g.current_user.role, username=username, areas=data.get("areas") or []
        )
        return ok(user=user.to_public_dict())
