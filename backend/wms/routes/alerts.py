from flask import Blueprint, request, jsonify
from wms.alerts import (
    ACTIVE, ALERT_LIST_CONFIGS, ALERT_MODES, ALERT_TYPES, alert_stats, annotate, load_alert_rows,
)
from wms.extensions import gateways
from wms.gateway import fetch_all
from wms_utils.audit import log_event
from wms_utils.decorators import login_required
from .screens import reference_time, render_list

alerts_bp = Blueprint('alerts', __name__)


def _alert_type(value):
    alert_type = (value or "trade").lower()
    if alert_type not in ALERT_TYPES:
        return None
    return alert_type


def _render_alerts(alert_type, mode, args=None, **extra):
    gateway = gateways[ALERT_TYPES[alert_type].endpoint]
    rows = load_alert_rows(gateway, mode)
    now = reference_time()
    return render_list(
        ALERT_LIST_CONFIGS[alert_type], rows, f"list:alerts-{alert_type}-{mode}",
        args=args, decorate=lambda row: annotate(row, now), type=alert_type, mode=mode, **extra
    )


@alerts_bp.route('/', methods=['GET'])
@login_required
def list_alerts():
    alert_type = _alert_type(request.args.get("type"))
    mode = request.args.get("mode", ACTIVE)
    if alert_type is None:
        return jsonify({"error": f"Unknown alert type. Use one of: {', '.join(ALERT_TYPES)}"}), 400
    if mode not in ALERT_MODES:
        return jsonify({"error": f"Unknown alert mode. Use one of: {', '.join(ALERT_MODES)}"}), 400
    return _render_alerts(alert_type, mode, args=request.args)


@alerts_bp.route('/stats', methods=['GET'])
@login_required
def stats():
    types = list(ALERT_TYPES)
    results = fetch_all(*(gateways[ALERT_TYPES[t].endpoint].alist_alerts for t in types))
    return jsonify({t: alert_stats(rows) for t, rows in zip(types, results)})


@alerts_bp.route('/<alert_type>/<worker_id>/<action>', methods=['POST'])
@login_required
def toggle_completed(alert_type, worker_id, action):
    """Acknowledge (``complete``) or re-open (``incomplete``) one register alert."""
    alert_type = _alert_type(alert_type)
    if alert_type is None or action not in ("complete", "incomplete"):
        return jsonify({"error": "Not found"}), 404

    data = request.get_json(silent=True) or {}
    record_date = data.get("Record_Date")
    if not record_date:
        return jsonify({"error": "Record_Date is required"}), 400
    mode = data.get("mode", ACTIVE)
    if mode not in ALERT_MODES:
        mode = ACTIVE

    gateway = gateways[ALERT_TYPES[alert_type].endpoint]
    gateway.set_alert_completed(worker_id, str(record_date).split("T")[0], action == "complete")
    log_event("ALERT_COMPLETED" if action == "complete" else "ALERT_REOPENED",
              f"{alert_type} {worker_id} {record_date}")
    return _render_alerts(alert_type, mode, message="Alert status updated")
