from __future__ import annotations

from functools import wraps

from flask import flash, redirect, render_template, session, url_for

from ..core.enums import Role


def current_user() -> dict:
    return {"user_id": session.get("user_id"), "full_name": session.get("name"), "role": session.get("role")}


def current_role() -> Role:
    return Role(session.get("role", Role.STAFF.value))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("login"))

        if session.get("role") != Role.ADMIN.value:
            return render_template("403.html"), 403

        return view(*args, **kwargs)

    return wrapper
