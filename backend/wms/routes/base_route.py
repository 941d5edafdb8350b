from flask import Blueprint, current_app, jsonify

base_bp = Blueprint("base", __name__)

@base_bp.route("/")
def home():
    return jsonify({"message": "Welcome to the Worker Management System!"})

@base_bp.route("/health")
def health():
    return jsonify({"status": "ok", "api_base_url": current_app.config["API_BASE_URL"]})
