from __future__ import annotations

from flask import Flask, g, request

from ..common.datetime_utils import require_iso_date
from ..common.web import fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login = login_required(container)
    ledger = container.ledger

    def _area_from(data: dict) -> str:
        return str(data.get("area") or "")

    def _forbidden_area(area: str):
        if not g.current_user.can_access(area):
            return fail("You do not have access to this area", 403)
        return None

    @app.get("/api/attendance/<date_str>", endpoint="attendance_day")
    @login
    def attendance_day(date_str: str):
        date_str = require_iso_date(date_str)
        areas = container.area_service.visible_areas(g.current_user)

        cards = []
        rows_total = 0
        confirmed_total = 0
        for area in areas:
            totals = ledger.area_totals(date_str, area)
            rows_total += totals.row_count
            confirmed_total += totals.confirmed_count
            cards.append(
                {
                    "area": area,
                    "rows": [r.to_dict() for r in ledger.get_area(date_str, area).rows],
                    "totals": totals.to_dict(),
                    "status": ledger.area_status(date_str, area).value,
                    "lastUpdated": ledger.area_last_updated(date_str, area),
                }
            )

        return ok(
            date=date_str,
            areas=cards,
            grandTotal=ledger.grand_total(date_str, areas),
            confirmedRows=confirmed_total,
            totalRows=rows_total,
        )

    @app.post("/api/attendance/<date_str>/rows", endpoint="add_row")
    @login
    def add_row(date_str: str):
        data = json_body()
        area = _area_from(data)
        denied = _forbidden_area(area)
        if denied:
            return denied
        row = ledger.add_or_update_row(date_str, area, str(data.get("label") or ""))
        if not row:
            return fail("Please log in to continue", 401)
        return ok(row=row.to_dict()), 201

    @app.patch("/api/attendance/<date_str>/rows", endpoint="update_row")
    @login
    def update_row(date_str: str):
        data = json_body()
        area = _area_from(data)
        denied = _forbidden_area(area)
        if denied:
            return denied
        updates = {k: data[k] for k in ("present", "confirmed") if k in data}
        row = ledger.update_row(date_str, area, str(data.get("designationKey") or ""), updates)
        if not row:
            return fail("Row not found", 404)
        return ok(row=row.to_dict())

    @app.delete("/api/attendance/<date_str>/rows", endpoint="delete_row")
    @login
    def delete_row(date_str: str):
        data = json_body()
        area = _area_from(data)
        denied = _forbidden_area(area)
        if denied:
            return denied
        if not ledger.delete_row(date_str, area, str(data.get("designationKey") or "")):
            return fail("Row not found", 404)
        return ok()

    @app.post("/api/attendance/<date_str>/confirm-all", endpoint="confirm_all")
    @login
    def confirm_all(date_str: str):
        areas = container.area_service.visible_areas(g.current_user)
        return ok(confirmed=ledger.confirm_all_valid(date_str, areas))

    @app.post("/api/attendance/<date_str>/clear", endpoint="clear_all")
    @login
    def clear_all(date_str: str):
        areas = container.area_service.visible_areas(g.current_user)
        return ok(removed=ledger.clear_areas(date_str, areas))

    @app.get("/api/attendance/<date_str>/audit", endpoint="audit_log")
    @login
    def audit_log(date_str: str):
        return ok(entries=[e.to_dict() for e in container.audit_log.read(date_str)])

    @app.get("/api/designations/suggest", endpoint="suggest_designations")
    @login
    def suggest_designations():
        partial = request.args.get("q", "")
        area = request.args.get("area") or None
        return ok(suggestions=container.designation_index.suggest(partial, area))
