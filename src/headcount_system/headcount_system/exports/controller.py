from __future__ import annotations

from flask import Flask, g

from ..common.web import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login = login_required(container)

    @app.get("/api/attendance/<date_str>/export/<report>", endpoint="export_report")
    @login
    def export_report(date_str: str, report: str):
        areas = container.area_service.visible_areas(g.current_user)
        csv_report = container.export_service.report(report, date_str, areas)

        # BOM so spreadsheet apps pick up UTF-8 area names.
        return app.response_class(
            csv_report.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={csv_report.filename}"},
        )
