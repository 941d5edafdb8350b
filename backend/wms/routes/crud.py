from flask import Blueprint, request, jsonify, session
from wms.extensions import gateways
from wms.forms import FormController, FormValidationError
from wms.gateway import GatewayError
from wms_utils.audit import log_event
from wms_utils.decorators import login_required
from wms_utils.formSchema import generate_schema_from_model
from .screens import reference_time, render_list, validity_decorator


def _list_key(schema):
    return f"list:{schema.endpoint}"


def _form_key(schema):
    return f"form:{schema.endpoint}"


def make_entity_blueprint(schema):
    """List screen, form controller and delete for one remote entity."""
    bp = Blueprint(schema.endpoint.replace("-", "_"), __name__)
    config = schema.list_config

    def gateway():
        return gateways[schema.endpoint]

    def render(items, args=None, **extra):
        decorate = validity_decorator(reference_time()) if schema.is_register else None
        return render_list(config, items, _list_key(schema), args=args, decorate=decorate, **extra)

    def load_form():
        return FormController.from_dict(schema, session.get(_form_key(schema)))

    def save_form(form):
        session[_form_key(schema)] = form.to_dict()

    @bp.route('/', methods=['GET'])
    @login_required
    def list_records():
        return render(gateway().list(), args=request.args)

    @bp.route('/form_schema', methods=['GET'])
    @login_required
    def form_schema():
        return jsonify(generate_schema_from_model(schema))

    @bp.route('/form', methods=['GET'])
    @login_required
    def get_form():
        return jsonify(load_form().to_dict())

    @bp.route('/form', methods=['POST'])
    @login_required
    def change_form():
        """Open the form for create or edit, or type into the open form.

        ``{"mode": "create"}`` opens a blank form; ``{"mode": "edit", "key": ...,
        "Record_Date": ...}`` opens it on an existing record; ``{"values": {...}}``
        updates fields of the open form.
        """
        data = request.get_json(silent=True) or {}
        form = load_form()
        mode = data.get("mode")

        if mode == "create":
            form.open_create()
        elif mode == "edit":
            key = data.get("key")
            if key in (None, ""):
                return jsonify({"error": f"{schema.key} is required"}), 400
            record = schema.find(gateway().list(), key, data.get("Record_Date"))
            if record is None:
                return jsonify({"error": f"{schema.singular.capitalize()} not found"}), 404
            form.open_edit(record)
        elif mode is not None:
            return jsonify({"error": f"Unknown form mode '{mode}'"}), 400

        if data.get("values"):
            form.update_fields(data["values"])

        save_form(form)
        return jsonify(form.to_dict())

    @bp.route('/form/cancel', methods=['POST'])
    @login_required
    def cancel_form():
        form = load_form()
        form.cancel()
        save_form(form)
        return jsonify(form.to_dict())

    @bp.route('/form/submit', methods=['POST'])
    @login_required
    def submit_form():
        data = request.get_json(silent=True) or {}
        form = load_form()
        if data.get("values"):
            form.update_fields(data["values"])
        editing = form.original is not None

        try:
            items = form.submit(gateway())
        except FormValidationError as e:
            save_form(form)
            return jsonify({"error": "Please correct the highlighted fields", "errors": e.errors}), 400
        except GatewayError:
            save_form(form)
            raise

        save_form(form)
        log_event("RECORD_UPDATED" if editing else "RECORD_CREATED", schema.endpoint)
        return render(items, message=f"{schema.singular.capitalize()} saved successfully")

    @bp.route('/<key>', methods=['DELETE'])
    @login_required
    def delete_record(key):
        data = request.get_json(silent=True) or {}
        record_date = data.get("Record_Date")
        if schema.is_register:
            if not record_date:
                return jsonify({"error": "Record_Date is required"}), 400
            record_date = str(record_date).split("T")[0]

        gateway().delete(key, record_date=record_date)
        log_event("RECORD_DELETED", f"{schema.endpoint}/{key} {record_date or ''}".strip())
        return render(gateway().list(), message=f"{schema.singular.capitalize()} deleted successfully")

    return bp
