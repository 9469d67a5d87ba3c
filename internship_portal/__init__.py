import os

from flask import Flask, jsonify

from .controllers.auth import bp as auth_bp
from .controllers.company import bp as company_bp
from .controllers.staff import bp as staff_bp
from .controllers.student import bp as student_bp
from .exceptions import PortalError
from .models.registry import UserRegistry
from .models.store import PlacementStore
from .seed import seed_demo_data


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        SEED_DEMO_DATA=os.getenv("APP_ENV") not in ("test", "production"),
    )
    if test_config:
        app.config.update(test_config)

    UserRegistry.instance()
    PlacementStore.instance()
    if app.config["SEED_DEMO_DATA"]:
        seed_demo_data()

    app.register_blueprint(auth_bp)
    app.register_blueprint(staff_bp)
    app.register_blueprint(student_bp)
    app.register_blueprint(company_bp)

    @app.errorhandler(PortalError)
    def handle_portal_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(ValueError)
    def handle_value_error(e):
        return jsonify(error="ValidationError", message=str(e)), 400

    @app.get("/")
    def home():
        return jsonify(service="internship-portal", status="ok")

    return app
