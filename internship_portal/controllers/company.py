from flask import Blueprint, request, session, jsonify

from ..services.company_service import CompanyService
from ..services.listing_filter import criteria_from_args
from ..utils.constants import UserType
from ..utils.decorators import role_required

bp = Blueprint("company", __name__, url_prefix="/company")


@bp.get("/listings")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def my_listings():
    listings = CompanyService.my_listings(session["uid"], **criteria_from_args(request.args))
    return jsonify(listings=[i.to_dict() for i in listings])


@bp.post("/listings")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def create_listing():
    data = request.get_json(silent=True) or request.form.to_dict()
    listing = CompanyService.create_listing(session["uid"], data)
    return jsonify(message="Internship created", listing=listing.to_dict()), 201


@bp.post("/listings/<int:listing_id>/edit")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def edit_listing(listing_id):
    data = request.get_json(silent=True) or request.form.to_dict()
    listing = CompanyService.edit_listing(session["uid"], listing_id, data)
    return jsonify(message="Internship updated", listing=listing.to_dict())


@bp.post("/listings/<int:listing_id>/visibility")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def toggle_visibility(listing_id):
    visible = CompanyService.toggle_visibility(session["uid"], listing_id)
    return jsonify(listing_id=listing_id, visible=visible)


@bp.post("/listings/<int:listing_id>/delete")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def delete_listing(listing_id):
    CompanyService.delete_listing(session["uid"], listing_id)
    return jsonify(message="Internship deleted")


@bp.get("/listings/<int:listing_id>/applications")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def listing_applications(listing_id):
    apps = CompanyService.applications_for_listing(session["uid"], listing_id)
    return jsonify(applications=[a.to_dict() for a in apps])


@bp.post("/applications/<int:application_id>/<any(approve, reject):action>")
@role_required(UserType.COMPANY_REPRESENTATIVE)
def review_application(application_id, action):
    app = CompanyService.review_application(session["uid"], application_id, action == "approve")
    return jsonify(message="Application reviewed", application=app.to_dict())
