from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from ..users.access import admin_required, current_role, login_required
from .display import format_employee_for_display
from .validation import empty_employee_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _form_data() -> dict:
        return {
            "name": request.form.get("name", ""),
            "aadhar_id": request.form.get("aadhar_id", ""),
            "joining_date": request.form.get("joining_date", ""),
            "age": request.form.get("age", ""),
        }

    @app.route("/employees", methods=["GET"], endpoint="employees")
    @login_required
    def employees():
        q = request.args.get("q", "")
        rows = container.employee_service.search_employees(q)
        stats = container.employee_service.get_employee_stats()
        return render_template(
            "employees/list.html",
            employees=[format_employee_for_display(e) for e in rows],
            stats=stats,
            q=q,
            active_page="employees",
        )

    @app.route("/employees/new", methods=["GET", "POST"], endpoint="new_employee")
    @login_required
    def new_employee():
        form = empty_employee_form()
        errors: dict = {}

        if request.method == "POST":
            form = _form_data()
            try:
                employee = container.employee_service.create_employee(form)
                flash(f"Employee {employee.name} added successfully", "success")
                return redirect(url_for("employees"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to create employee")
                flash("System error while saving the employee", "danger")

        return render_template(
            "employees/form.html",
            form=form,
            errors=errors,
            employee_id=None,
            active_page="employees",
        )

    @app.route("/employees/<int:employee_id>/edit", methods=["GET", "POST"], endpoint="edit_employee")
    @login_required
    def edit_employee(employee_id: int):
        employee = container.employee_service.get_employee(employee_id)
        if not employee:
            flash("Employee not found", "warning")
            return redirect(url_for("employees"))

        form = {
            "name": employee.name,
            "aadhar_id": employee.aadhar_id or "",
            "joining_date": employee.joining_date.strftime("%Y-%m-%d"),
            "age": str(employee.age or ""),
        }
        errors: dict = {}

        if request.method == "POST":
            form = _form_data()
            try:
                container.employee_service.update_employee(employee_id, form)
                flash("Employee updated successfully", "success")
                return redirect(url_for("employees"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to update employee %s", employee_id)
                flash("System error while saving the employee", "danger")

        return render_template(
            "employees/form.html",
            form=form,
            errors=errors,
            employee_id=employee_id,
            active_page="employees",
        )

    @app.route("/employees/<int:employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: int):
        try:
            container.employee_service.deactivate_employee(employee_id)
            flash("Employee deleted successfully", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to deactivate employee %s", employee_id)
            flash("System error while deleting the employee", "danger")
        return redirect(url_for("employees"))

    @app.route("/employees/<int:employee_id>/purge", methods=["POST"], endpoint="purge_employee")
    @admin_required
    def purge_employee(employee_id: int):
        try:
            container.employee_service.delete_employee_permanently(
                current_role=current_role(),
                employee_id=employee_id,
            )
            flash("Employee permanently deleted", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to delete employee %s", employee_id)
            flash("System error while deleting the employee", "danger")
        return redirect(url_for("employees"))
