from __future__ import annotations

from flask import Flask, g

from ..common.web import admin_required, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin = admin_required(container)
    settings_service = container.settings_service

    @app.get("/api/settings", endpoint="get_settings")
    def get_settings():
        return ok(settings=settings_service.get_settings().to_dict())

    @app.put("/api/settings/dark-mode", endpoint="set_dark_mode")
    def set_dark_mode():
        data = json_body()
        settings = settings_service.set_dark_mode(bool(data.get("enabled")))
        return ok(settings=settings.to_dict())

    @app.get("/api/admin/retention", endpoint="retention_info")
    @admin
    def retention_info():
        settings = settings_service.get_settings()
        return ok(retentionDays=settings.retention_days, expiredDates=settings_service.count_expired_dates())

    @app.put("/api/admin/retention", endpoint="set_retention")
    @admin
    def set_retention():
        data = json_body()
        settings = settings_service.set_retention_days(current_role=g.current_user.role, days=data.get("days"))
        return ok(settings=settings.to_dict())

    @app.post("/api/admin/retention/purge", endpoint="purge_retention")
    @admin
    def purge_retention():
        return ok(deleted=settings_service.purge_expired_dates(current_role=g.current_user.role))
