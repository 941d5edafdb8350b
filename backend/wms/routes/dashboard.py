from flask import Blueprint, jsonify
from wms.dashboard import collect_counts, summarize
from wms.extensions import gateways
from wms_utils.decorators import login_required

dashboard_bp = Blueprint('dashboard', __name__)

@dashboard_bp.route('/summary')
@login_required
def summary():
    # a failed count shows as 0 and never blocks the others
    return jsonify(summarize(collect_counts(gateways)))
