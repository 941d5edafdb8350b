import logging
import os
from datetime import datetime, timezone

from flask import current_app, has_app_context, has_request_context, request, session

DEFAULT_AUDIT_LOG_FILE = os.path.join("logs", "audit.log")


def audit_log_path():
    if has_app_context():
        return current_app.config.get("AUDIT_LOG_FILE", DEFAULT_AUDIT_LOG_FILE)
    return DEFAULT_AUDIT_LOG_FILE


def _request_actor():
    """(user id, remote address) of the request being served, if any."""
    if not has_request_context():
        return None, None
    return session.get("user_id"), request.remote_addr


def format_event(event_type, user_id=None, ip=None, description=None, level="INFO", when=None):
    when = when or datetime.now(timezone.utc)
    return (
        f"[{when:%Y-%m-%d %H:%M:%S}] [{level.upper()}] EVENT: {event_type} | "
        f"USER: {user_id or 'N/A'} | IP: {ip or 'N/A'} | DESC: {description or 'N/A'}"
    )


def log_event(event_type, description=None, level="INFO", user_id=None, ip=None):
    """
    Append one line to the audit log (logins, record changes, alert toggles,
    rate-limit breaches).

    Inside a request the logged-in user and the remote address are filled in
    unless passed explicitly. The same line also goes to the app logger.
    """
    session_user, remote_addr = _request_actor()
    line = format_event(event_type, user_id or session_user, ip or remote_addr, description, level)

    path = audit_log_path()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "a") as log_file:
        log_file.write(line + "\n")

    if has_app_context():
        current_app.logger.log(logging.getLevelName(level.upper()), line)
    return line
