from flask import Blueprint, request, session, jsonify

from ..services.auth_service import AuthService
from ..services.common import _registry
from ..utils.decorators import login_required

bp = Blueprint("auth", __name__, url_prefix="/auth")


@bp.post("/login")
def login_submit():
    data = request.get_json(silent=True) or request.form
    user_id = (data.get("user_id") or "").strip()
    password = data.get("password") or ""

    ok, msg, user = AuthService.login(user_id, password)
    if not ok:
        return jsonify(error="AuthenticationError", message=msg), 401

    session.clear()
    session["uid"] = user.user_id
    session["role"] = user.get_user_type()
    return jsonify(message=msg, user=user.to_dict())


@bp.post("/logout")
def logout():
    user = _registry().find_by_id(session.get("uid"))
    if user is not None:
        user.logout()
    session.clear()
    return jsonify(message="Logged out")


@bp.post("/register")
def register_submit():
    """Company representative sign-up; staff and students are pre-loaded."""
    data = request.get_json(silent=True) or request.form.to_dict()
    ok, msg, user_id = AuthService.register_company_rep(data)
    if not ok:
        return jsonify(error="RegistrationError", message=msg), 400
    return jsonify(message=msg, user_id=user_id), 201


@bp.get("/me")
@login_required
def me():
    user = _registry().find_by_id(session["uid"])
    if user is None:
        session.clear()
        return jsonify(error="Unauthorized", message="Please login first"), 401
    return jsonify(user=user.to_dict(), profile=user.profile_text())


@bp.post("/password")
@login_required
def change_password():
    data = request.get_json(silent=True) or request.form
    ok, msg = AuthService.change_password(
        session["uid"], data.get("old_password") or "", data.get("new_password") or ""
    )
    return jsonify(message=msg), (200 if ok else 400)
