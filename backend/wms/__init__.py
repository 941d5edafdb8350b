from flask import Flask, jsonify
from flask_cors import CORS
from .config import Config
from wms.forms import FormStateError
from wms.gateway import GatewayError
from wms.routes import register_routes
from wms.extensions import gateways, limiter
from wms_utils.filtering import FilterError


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    limiter.init_app(app)
    gateways.init_app(app)
    register_routes(app)
    register_error_handlers(app)

    app.logger.info("Screens backed by %s; login is a shared credential check only",
                    app.config["API_BASE_URL"])
    return app


def register_error_handlers(app):
    @app.errorhandler(GatewayError)
    def handle_gateway_error(error):
        app.logger.warning("Remote API failure: %s", error.message)
        return jsonify({"error": error.message}), 502

    @app.errorhandler(FilterError)
    def handle_filter_error(error):
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(FormStateError)
    def handle_form_state_error(error):
        return jsonify({"error": str(error)}), 400
