from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import coerce_date, today_local
from ..common.formatting import format_currency
from ..core.enums import ExpenseCategory, ExpensePaymentMode, ExpenseStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from ..users.access import admin_required, current_role, login_required
from .model import CATEGORY_LABELS, PAYMENT_MODE_LABELS
from .validation import empty_expense_form

logger = logging.getLogger(__name__)

REPORT_VIEWS = ("daily", "monthly", "category")


def register(app: Flask, container: Container) -> None:
    def _choice(name: str, enum_cls):
        value = request.args.get(name) or None
        return value if value in {e.value for e in enum_cls} else None

    @app.route("/expenses", methods=["GET", "POST"], endpoint="expenses")
    @login_required
    def expenses():
        form = empty_expense_form()
        errors: dict = {}

        if request.method == "POST":
            form = {
                "amount": request.form.get("amount", ""),
                "category": request.form.get("category", ""),
                "date": request.form.get("date", ""),
                "payment_mode": request.form.get("payment_mode", ""),
                "vendor": request.form.get("vendor", ""),
                "description": request.form.get("description", ""),
            }
            try:
                container.expense_service.create_expense(form, created_by=session.get("user_id"))
                flash("Expense created successfully", "success")
                return redirect(url_for("expenses"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to create expense")
                flash("System error while saving the expense", "danger")

        rows = container.expense_service.list_expenses(
            category=_choice("category", ExpenseCategory),
            payment_mode=_choice("mode", ExpensePaymentMode),
            status=_choice("status", ExpenseStatus),
            start_date=coerce_date(request.args.get("start")),
            end_date=coerce_date(request.args.get("end")),
        )
        return render_template(
            "expenses/index.html",
            form=form,
            errors=errors,
            expenses=rows,
            total=sum((e.amount for e in rows), 0),
            filters=request.args,
            category_labels=CATEGORY_LABELS,
            mode_labels=PAYMENT_MODE_LABELS,
            statuses=list(ExpenseStatus),
            format_currency=format_currency,
            active_page="expenses",
        )

    @app.route("/expenses/reports", methods=["GET"], endpoint="expense_reports")
    @login_required
    def expense_reports():
        today = today_local()
        view = request.args.get("view") or "daily"
        if view not in REPORT_VIEWS:
            view = "daily"

        report: dict
        if view == "monthly":
            year = request.args.get("year", type=int) or today.year
            month = request.args.get("month", type=int) or today.month
            if not 1 <= month <= 12:
                month = today.month
            report = container.expense_service.get_monthly_report(year, month)
        elif view == "category":
            start = coerce_date(request.args.get("start")) or today.replace(day=1)
            end = coerce_date(request.args.get("end")) or today
            report = container.expense_service.get_category_summary(start, end)
        else:
            day = coerce_date(request.args.get("date")) or today
            report = container.expense_service.get_daily_report(day)

        return render_template(
            "expenses/reports.html",
            view=view,
            views=REPORT_VIEWS,
            report=report,
            category_labels={c.value: label for c, label in CATEGORY_LABELS.items()},
            format_currency=format_currency,
            active_page="expense_reports",
        )

    @app.route("/expenses/<int:expense_id>/delete", methods=["POST"], endpoint="delete_expense")
    @login_required
    def delete_expense(expense_id: int):
        try:
            if container.expense_service.delete_expense(expense_id):
                flash("Expense deleted successfully", "success")
            else:
                flash("Expense not found", "warning")
        except Exception:
            logger.exception("Failed to delete expense %s", expense_id)
            flash("System error while deleting the expense", "danger")
        return redirect(url_for("expenses"))

    @app.route("/expenses/<int:expense_id>/decide", methods=["POST"], endpoint="decide_expense")
    @admin_required
    def decide_expense(expense_id: int):
        decision = request.form.get("decision", "")
        try:
            if decision not in {"approve", "reject"}:
                raise ValidationError("Invalid decision")
            expense = container.expense_service.decide_expense(
                current_role=current_role(),
                expense_id=expense_id,
                approve=decision == "approve",
                decided_by=session.get("user_id"),
            )
            flash(f"Expense {expense.status.value}", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to decide expense %s", expense_id)
            flash("System error while updating the expense", "danger")
        return redirect(url_for("expenses"))
