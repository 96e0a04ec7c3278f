from __future__ import annotations

from flask import Flask, g

from ..common.web import admin_required, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin = admin_required(container)

    @app.get("/api/admin/areas", endpoint="admin_areas")
    @admin
    def admin_areas():
        return ok(areas=list(container.area_service.list_areas()))

    @app.post("/api/admin/areas", endpoint="add_area")
    @admin
    def add_area():
        data = json_body()
        areas = container.area_service.add_area(current_role=g.current_user.role, name=str(data.get("name") or ""))
        return ok(areas=list(areas)), 201

    @app.put("/api/admin/areas", endpoint="rename_area")
    @admin
    def rename_area():
        data = json_body()
        areas = container.area_service.rename_area(
            current_role=g.current_user.role,
            old_name=str(data.get("oldName") or ""),
            new_name=str(data.get("newName") or ""),
        )
        return ok(areas=list(areas))

    @app.delete("/api/admin/areas", endpoint="delete_area")
    @admin
    def delete_area():
        data = json_body()
        areas = container.area_service.delete_area(current_role=g.current_user.role, name=str(data.get("name") or ""))
        return ok(areas=list(areas))
