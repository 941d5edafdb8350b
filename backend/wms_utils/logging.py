from flask import request, jsonify, make_response
from wms_utils.audit import log_event


def log_rate_limit_violation(request_limit):
    """Flask-Limiter breach callback: audit the hit and answer with a JSON 429."""
    log_event(
        "RATE_LIMIT_EXCEEDED",
        f"{request.method} {request.path} ({request_limit.limit})",
        level="WARNING",
    )

    return make_response(jsonify({
        "error": "Rate limit exceeded. Please slow down."
    }), 429)
