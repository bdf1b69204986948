from __future__ import annotations

import csv
import io
import logging
from datetime import date

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.datetime_utils import coerce_date, today_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.access import login_required
from .display import can_modify_attendance, get_date_range
from .validation import empty_attendance_form

logger = logging.getLogger(__name__)

REPORT_PERIODS = ("today", "week", "month", "custom")


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str, default: date) -> date:
        return coerce_date(request.args.get(name)) or default

    def _report_range() -> tuple[str, date, date]:
        period = request.args.get("period") or "month"
        if period not in REPORT_PERIODS:
            period = "month"
        start, end = get_date_range(period, request.args.get("start"), request.args.get("end"))
        return period, start, end

    def _write_report_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["date", "employee_id", "employee_name", "status", "marked_by", "notes"],
            extrasaction="ignore",
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/attendance", methods=["GET", "POST"], endpoint="attendance")
    @login_required
    def attendance():
        work_date = _date_arg("date", today_local())
        form = empty_attendance_form(today=work_date)
        errors: dict = {}

        if request.method == "POST":
            form = {
                "employee_id": request.form.get("employee_id", ""),
                "date": request.form.get("date", ""),
                "status": request.form.get("status", ""),
                "marked_by": session.get("name") or "",
                "notes": request.form.get("notes", ""),
            }
            try:
                record = container.attendance_service.mark_attendance(form)
                flash("Attendance saved successfully", "success")
                return redirect(url_for("attendance", date=record.work_date.strftime("%Y-%m-%d")))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to mark attendance")
                flash("System error while saving attendance", "danger")

        return render_template(
            "attendance/index.html",
            form=form,
            errors=errors,
            work_date=work_date.strftime("%Y-%m-%d"),
            records=container.attendance_service.list_for_date(work_date),
            unmarked=container.attendance_service.employees_without_attendance(work_date),
            employees=container.employee_service.list_employees(),
            statuses=list(AttendanceStatus),
            active_page="attendance",
        )

    @app.route("/attendance/bulk", methods=["GET", "POST"], endpoint="bulk_attendance")
    @login_required
    def bulk_attendance():
        work_date = _date_arg("date", today_local())
        employees = container.employee_service.list_employees()

        if request.method == "POST":
            date_s = request.form.get("date", "")
            rows = []
            for employee_id in request.form.getlist("employee_ids"):
                status = request.form.get(f"status_{employee_id}", "")
                if not status:
                    continue
                rows.append(
                    {
                        "employee_id": employee_id,
                        "date": date_s,
                        "status": status,
                        "marked_by": session.get("name") or "",
                        "notes": request.form.get(f"notes_{employee_id}", ""),
                    }
                )

            if not rows:
                flash("No attendance data provided", "warning")
            else:
                try:
                    result = container.attendance_service.mark_bulk_attendance(rows)
                    if result.errors:
                        details = "; ".join(f"#{r['employee_id']}: {r['error']}" for r in result.error_records)
                        flash(f"Saved {result.success} of {result.total} records. {details}", "warning")
                    else:
                        flash(f"Saved {result.success} attendance records", "success")
                    return redirect(url_for("attendance", date=date_s))
                except Exception:
                    logger.exception("Failed to mark bulk attendance")
                    flash("System error while saving attendance", "danger")

        return render_template(
            "attendance/bulk.html",
            work_date=work_date.strftime("%Y-%m-%d"),
            employees=employees,
            statuses=list(AttendanceStatus),
            active_page="bulk_attendance",
        )

    @app.route("/attendance/reports", methods=["GET"], endpoint="attendance_reports")
    @login_required
    def attendance_reports():
        period, start, end = _report_range()
        return render_template(
            "attendance/reports.html",
            period=period,
            periods=REPORT_PERIODS,
            start=start.strftime("%Y-%m-%d"),
            end=end.strftime("%Y-%m-%d"),
            rows=container.attendance_service.list_for_date_range(start, end),
            stats=container.attendance_service.get_attendance_stats(start_date=start, end_date=end),
            active_page="attendance_reports",
        )

    @app.route("/attendance/reports.csv", methods=["GET"], endpoint="attendance_reports_csv")
    @login_required
    def attendance_reports_csv():
        _, start, end = _report_range()
        rows = container.attendance_service.list_for_date_range(start, end)
        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(rows=rows, filename=filename)

    @app.route("/attendance/delete/<attendance_key>", methods=["POST"], endpoint="delete_attendance")
    @login_required
    def delete_attendance(attendance_key: str):
        record = container.attendance_service.get_by_key(attendance_key)
        check = can_modify_attendance(record)
        if not check.can_modify:
            flash(check.reason, "warning")
            return redirect(url_for("attendance"))

        try:
            if container.attendance_service.delete_attendance(attendance_key):
                flash("Attendance record deleted", "success")
            else:
                flash("Attendance record not found", "warning")
        except Exception:
            logger.exception("Failed to delete attendance %s", attendance_key)
            flash("System error while deleting attendance", "danger")
        return redirect(url_for("attendance", date=record.work_date.strftime("%Y-%m-%d")))

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_attendance_stats")
    @login_required
    def api_attendance_stats():
        _, start, end = _report_range()
        employee_id = request.args.get("employee_id", type=int)
        try:
            stats = container.attendance_service.get_attendance_stats(
                employee_id=employee_id,
                start_date=start,
                end_date=end,
            )
        except Exception:
            logger.exception("Failed to compute attendance stats")
            return jsonify({"success": False, "message": "System error while computing statistics"}), 500

        return jsonify(
            {
                "success": True,
                "start": start.strftime("%Y-%m-%d"),
                "end": end.strftime("%Y-%m-%d"),
                "stats": stats,
            }
        )
