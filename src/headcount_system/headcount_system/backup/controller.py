from __future__ import annotations

from flask import Flask, g, request

from ..common.web import admin_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin = admin_required(container)

    @app.get("/api/admin/backup", endpoint="export_backup")
    @admin
    def export_backup():
        return ok(backup=container.backup_service.export_backup())

    @app.post("/api/admin/backup", endpoint="import_backup")
    @admin
    def import_backup():
        written = container.backup_service.import_backup_json(
            current_role=g.current_user.role,
            text=request.get_data(as_text=True),
        )
        return ok(imported=written)
