from flask import Blueprint, request, jsonify, current_app, session
from wms.extensions import limiter
from wms_utils.audit import log_event
from wms_utils.decorators import login_required

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute", override_defaults=False)
def login():
    data = request.get_json(silent=True) or {}
    user_id = str(data.get('userId', '')).strip()
    password = data.get('password', '')

    if not user_id or not password:
        return jsonify({"error": "User ID and password are required"}), 400

    if (user_id == current_app.config["LOGIN_USER_ID"]
            and password == current_app.config["LOGIN_PASSWORD"]):
        session.clear()
        session["authenticated"] = True
        session["user_id"] = user_id
        log_event("LOGIN_SUCCESS", f"{user_id} logged in")
        return jsonify({"message": "Login successful", "userId": user_id})

    log_event("LOGIN_FAILED", f"Failed login attempt for {user_id}", level="WARNING")
    return jsonify({"error": "Invalid credentials"}), 401


@auth_bp.route('/me', methods=['GET'])
@login_required
def get_current_user():
    return jsonify({"userId": session.get("user_id"), "authenticated": True}), 200


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    user_id = session.get("user_id")
    # drops screen state and open forms along with the login flag
    session.clear()
    log_event("LOGOUT", user_id=user_id)
    return jsonify({"message": "Successfully logged out"})
