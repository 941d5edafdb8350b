from wms.models import ENTITIES
from .auth import auth_bp
from .alerts import alerts_bp
from .base_route import base_bp
from .crud import make_entity_blueprint
from .dashboard import dashboard_bp
from .reports import reports_bp

def register_routes(app):
    app.register_blueprint(base_bp)
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")
    app.register_blueprint(alerts_bp, url_prefix="/alerts")
    app.register_blueprint(reports_bp, url_prefix="/reports")
    for endpoint, schema in ENTITIES.items():
        app.register_blueprint(make_entity_blueprint(schema), url_prefix=f"/{endpoint}")
