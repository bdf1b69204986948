from __future__ import annotations

import logging

from flask import Flask, flash, render_template, request

from ..common.datetime_utils import today_local
from ..common.formatting import format_currency
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.access import login_required
from .service import SalaryCalculation, get_salary_summary, validate_salary_inputs

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/salary", methods=["GET", "POST"], endpoint="salary")
    @login_required
    def salary():
        today = today_local()
        form = {
            "employee_ids": [],
            "start_date": today.replace(day=1).strftime("%Y-%m-%d"),
            "end_date": today.strftime("%Y-%m-%d"),
            "daily_rate": str(container.salary_service.default_daily_rate),
        }
        errors: dict = {}
        calculations: list[SalaryCalculation] = []
        failures = []

        if request.method == "POST":
            form = {
                "employee_ids": request.form.getlist("employee_ids"),
                "start_date": request.form.get("start_date", ""),
                "end_date": request.form.get("end_date", ""),
                "daily_rate": request.form.get("daily_rate", ""),
            }
            try:
                first_id = form["employee_ids"][0] if form["employee_ids"] else ""
                validate_salary_inputs(first_id, form["start_date"], form["end_date"], form["daily_rate"]).raise_if_invalid()

                results = container.salary_service.calculate_salary_for_employees(
                    form["employee_ids"],
                    form["start_date"],
                    form["end_date"],
                    form["daily_rate"],
                )
                calculations = [r for r in results if isinstance(r, SalaryCalculation)]
                failures = [r for r in results if not isinstance(r, SalaryCalculation)]
                for failure in failures:
                    flash(f"Employee #{failure.employee_id}: {failure.error}", "warning")
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to calculate salary")
                flash("System error while calculating salary", "danger")

        return render_template(
            "salary/index.html",
            form=form,
            errors=errors,
            employees=container.employee_service.list_employees(),
            calculations=calculations,
            summaries=[get_salary_summary(c) for c in calculations],
            format_currency=format_currency,
            active_page="salary",
        )
