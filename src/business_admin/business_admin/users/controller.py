from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import today_local
from ..common.formatting import format_currency
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import ExpenseStatus
from ..core.exceptions import AuthenticationError
from ..container import Container
from .access import current_user, login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""
    app.jinja_env.globals["current_user"] = current_user

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(username, password)

                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

                session["user_id"] = s_user.user_id
                session["name"] = s_user.full_name
                session["role"] = s_user.role.value

                logger.info("User %s signed in", s_user.user_id)
                flash("Signed in successfully!", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Sign-in failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        today = today_local()
        user = container.auth_service.get_user(session["user_id"])
        if not user or not user.is_active:
            session.clear()
            flash("Your account is no longer active.", "warning")
            return redirect(url_for("login"))

        month_start = today.replace(day=1)
        return render_template(
            "dashboard.html",
            name=user.full_name,
            employee_stats=container.employee_service.get_employee_stats(),
            attendance_today=container.attendance_service.get_attendance_stats(start_date=today, end_date=today),
            unmarked=container.attendance_service.employees_without_attendance(today),
            payment_stats=container.payment_service.get_payment_stats(start_date=month_start, end_date=today),
            pending_expenses=container.expense_service.list_expenses(status=ExpenseStatus.PENDING),
            format_currency=format_currency,
            active_page="dashboard",
        )
