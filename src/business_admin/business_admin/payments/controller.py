from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import coerce_date
from ..common.formatting import format_currency
from ..core.enums import PaymentMode
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.access import login_required
from .display import format_payment_for_display
from .validation import empty_payment_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _form_data() -> dict:
        return {
            "employee_id": request.form.get("employee_id", ""),
            "amount": request.form.get("amount", ""),
            "payment_date": request.form.get("payment_date", ""),
            "payment_mode": request.form.get("payment_mode", ""),
            "paid_by": request.form.get("paid_by", ""),
            "notes": request.form.get("notes", ""),
        }

    def _filters() -> dict:
        mode = request.args.get("mode") or None
        if mode not in {m.value for m in PaymentMode}:
            mode = None
        return {
            "employee_id": request.args.get("employee_id", type=int),
            "start_date": coerce_date(request.args.get("start")),
            "end_date": coerce_date(request.args.get("end")),
            "payment_mode": mode,
            "paid_by": request.args.get("paid_by") or None,
        }

    @app.route("/payments", methods=["GET", "POST"], endpoint="payments")
    @login_required
    def payments():
        form = empty_payment_form()
        form["paid_by"] = session.get("name") or ""
        errors: dict = {}

        if request.method == "POST":
            form = _form_data()
            try:
                payment = container.payment_service.create_payment(form)
                flash(f"Payment of {format_currency(payment.amount)} recorded", "success")
                return redirect(url_for("payments"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to record payment")
                flash("System error while saving the payment", "danger")

        filters = _filters()
        q = request.args.get("q", "")
        employees = container.employee_service.list_employees()
        names = {e.employee_id: e.name for e in employees}
        rows = container.payment_service.search_payments(q, **filters)
        stats = container.payment_service.get_payment_stats(**filters)

        return render_template(
            "payments/index.html",
            form=form,
            errors=errors,
            employees=employees,
            modes=list(PaymentMode),
            payments=[format_payment_for_display(p, names.get(p.employee_id)) for p in rows],
            stats=stats,
            summary=container.payment_service.get_payment_summary_by_employee(**filters),
            filters=request.args,
            q=q,
            format_currency=format_currency,
            active_page="payments",
        )

    @app.route("/payments/<int:payment_id>/edit", methods=["GET", "POST"], endpoint="edit_payment")
    @login_required
    def edit_payment(payment_id: int):
        payment = container.payment_service.get_payment(payment_id)
        if not payment:
            flash("Payment record not found", "warning")
            return redirect(url_for("payments"))

        form = {
            "employee_id": str(payment.employee_id),
            "amount": str(payment.amount),
            "payment_date": payment.payment_date.strftime("%Y-%m-%d"),
            "payment_mode": payment.payment_mode.value,
            "paid_by": payment.paid_by,
            "notes": payment.notes or "",
        }
        errors: dict = {}

        if request.method == "POST":
            form = _form_data()
            try:
                container.payment_service.update_payment(payment_id, form)
                flash("Payment updated successfully", "success")
                return redirect(url_for("payments"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                logger.exception("Failed to update payment %s", payment_id)
                flash("System error while saving the payment", "danger")

        return render_template(
            "payments/form.html",
            form=form,
            errors=errors,
            payment=payment,
            employees=container.employee_service.list_employees(),
            modes=list(PaymentMode),
            active_page="payments",
        )

    @app.route("/payments/<int:payment_id>/delete", methods=["POST"], endpoint="delete_payment")
    @login_required
    def delete_payment(payment_id: int):
        try:
            if container.payment_service.delete_payment(payment_id):
                flash("Payment deleted", "success")
            else:
                flash("Payment record not found", "warning")
        except Exception:
            logger.exception("Failed to delete payment %s", payment_id)
            flash("System error while deleting the payment", "danger")
        return redirect(url_for("payments"))
