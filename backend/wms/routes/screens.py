"""Per-session screen state shared by the list-style blueprints."""
from flask import current_app, jsonify, session

from wms.listing import ListState, ListView, apply_request_args
from wms_utils.validity import classify, utcnow


def reference_time():
    clock = current_app.config.get("CLOCK")
    return clock() if clock else utcnow()


def load_view(config, items, state_key):
    state = ListState.from_dict(session.get(state_key), config)
    return ListView(config, items, state, per_page=current_app.config["PAGE_SIZE"],
                    now=reference_time())


def save_view(view, state_key):
    session[state_key] = view.state.to_dict()


def render_list(config, items, state_key, args=None, decorate=None, **extra):
    """Apply the request's interactions to the saved state and return the visible page."""
    view = load_view(config, items, state_key)
    if args is not None:
        apply_request_args(view, args)
    save_view(view, state_key)
    return jsonify({**view.to_dict(decorate), **extra})


def validity_decorator(now):
    def decorate(row):
        return {**row, "Validity_Alert": classify(row.get("Validity_Date"), now).label}
    return decorate
