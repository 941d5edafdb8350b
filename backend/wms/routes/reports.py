from datetime import date
from flask import Blueprint, request, jsonify, send_file
from wms.extensions import gateways
from wms.reports import REPORTS, build_report, load_report_data
from wms_utils.decorators import login_required
from wms_utils.export import XLSX_MIMETYPE, export_rows
from .screens import load_view, reference_time, render_list

reports_bp = Blueprint('reports', __name__)


def _report_rows(report):
    data = load_report_data(gateways)
    return build_report(report.key, data, reference_time(), worker_id=request.args.get("worker"))


def _unknown(key):
    return jsonify({"error": f"Unknown report type '{key}'"}), 400


@reports_bp.route('/', methods=['GET'])
@login_required
def list_reports():
    return jsonify([
        {"key": r.key, "label": r.label, "needs_worker": r.needs_worker}
        for r in REPORTS.values()
    ])


@reports_bp.route('/<report_type>', methods=['GET'])
@login_required
def show_report(report_type):
    report = REPORTS.get(report_type)
    if report is None:
        return _unknown(report_type)
    return render_list(report.list_config, _report_rows(report), f"list:report-{report.key}",
                       args=request.args, report=report.key, label=report.label)


@reports_bp.route('/<report_type>/export', methods=['GET'])
@login_required
def export_report(report_type):
    """Every filtered and sorted row of the report as a workbook, not just the visible page."""
    report = REPORTS.get(report_type)
    if report is None:
        return _unknown(report_type)

    view = load_view(report.list_config, _report_rows(report), f"list:report-{report.key}")
    buffer = export_rows(view.filtered_sorted, report.list_config.columns, title=report.label)
    return send_file(
        buffer,
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"{report.key}-report-{date.today().isoformat()}.xlsx"
    )
