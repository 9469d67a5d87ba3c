from flask import Blueprint, request, session, jsonify

from ..services.common import to_int_safe
from ..services.listing_filter import criteria_from_args
from ..services.student_service import StudentService
from ..utils.constants import UserType
from ..utils.decorators import role_required

bp = Blueprint("student", __name__, url_prefix="/student")


@bp.get("/listings")
@role_required(UserType.STUDENT)
def available_listings():
    listings = StudentService.available_listings(session["uid"], **criteria_from_args(request.args))
    return jsonify(listings=[i.to_dict() for i in listings])


@bp.get("/applications")
@role_required(UserType.STUDENT)
def my_applications():
    apps = StudentService.my_applications(session["uid"])
    return jsonify(applications=[a.to_dict() for a in apps])


@bp.post("/applications")
@role_required(UserType.STUDENT)
def apply():
    data = request.get_json(silent=True) or request.form
    listing_id = to_int_safe(data.get("listing_id"))
    if listing_id is None:
        return jsonify(message="Missing internship id"), 400
    app = StudentService.apply(session["uid"], listing_id)
    return jsonify(message="Application submitted", application=app.to_dict()), 201


@bp.post("/applications/<int:application_id>/withdraw")
@role_required(UserType.STUDENT)
def request_withdrawal(application_id):
    data = request.get_json(silent=True) or request.form
    app = StudentService.request_withdrawal(session["uid"], application_id, data.get("reason"))
    return jsonify(message="Withdrawal requested", application=app.to_dict())


@bp.post("/applications/<int:application_id>/accept")
@role_required(UserType.STUDENT)
def accept_offer(application_id):
    app = StudentService.accept_offer(session["uid"], application_id)
    return jsonify(message="Placement confirmed", application=app.to_dict())
