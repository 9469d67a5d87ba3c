from flask import Blueprint, request, session, jsonify

from ..services.listing_filter import criteria_from_args
from ..services.staff_service import StaffService
from ..utils.constants import UserType
from ..utils.decorators import role_required

bp = Blueprint("staff", __name__, url_prefix="/staff")


def _decision(ok, msg):
    return jsonify(message=msg), (200 if ok else 404)


@bp.get("/company-reps/pending")
@role_required(UserType.STAFF)
def pending_reps():
    return jsonify(reps=[r.to_dict() for r in StaffService.pending_company_reps()])


@bp.post("/company-reps/<rep_id>/<any(approve, reject):action>")
@role_required(UserType.STAFF)
def decide_rep(rep_id, action):
    ok, msg = StaffService.decide_company_rep(session["uid"], rep_id, action == "approve")
    return _decision(ok, msg)


@bp.get("/listings")
@role_required(UserType.STAFF)
def all_listings():
    listings = StaffService.all_listings(**criteria_from_args(request.args))
    return jsonify(listings=[i.to_dict() for i in listings])


@bp.get("/listings/pending")
@role_required(UserType.STAFF)
def pending_listings():
    listings = StaffService.pending_listings(**criteria_from_args(request.args))
    return jsonify(listings=[i.to_dict() for i in listings])


@bp.post("/listings/<int:listing_id>/<any(approve, reject):action>")
@role_required(UserType.STAFF)
def decide_listing(listing_id, action):
    ok, msg = StaffService.decide_listing(session["uid"], listing_id, action == "approve")
    return _decision(ok, msg)


@bp.get("/withdrawals")
@role_required(UserType.STAFF)
def withdrawal_requests():
    return jsonify(applications=[a.to_dict() for a in StaffService.withdrawal_requests()])


@bp.post("/withdrawals/<int:application_id>/<any(approve, reject):action>")
@role_required(UserType.STAFF)
def decide_withdrawal(application_id, action):
    ok, msg = StaffService.decide_withdrawal(session["uid"], application_id, action == "approve")
    return _decision(ok, msg)


@bp.post("/department")
@role_required(UserType.STAFF)
def update_department():
    data = request.get_json(silent=True) or request.form
    ok, msg = StaffService.update_department(session["uid"], data.get("department"))
    return jsonify(message=msg), (200 if ok else 400)


@bp.post("/reports")
@role_required(UserType.STAFF)
def generate_report():
    data = request.get_json(silent=True) or request.form
    ok, msg, report = StaffService.generate_report(session["uid"], data.get("criteria"))
    if not ok:
        return jsonify(message=msg), 400
    return jsonify(message=msg, report=report.to_dict()), 201
