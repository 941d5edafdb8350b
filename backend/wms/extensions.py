from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from wms.gateway import GatewayRegistry
from wms_utils.logging import log_rate_limit_violation

gateways = GatewayRegistry()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200000 per day", "6000 per hour"],
    on_breach=log_rate_limit_violation
)
