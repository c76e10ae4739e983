from .app import create_app
from .errors import ErrorStatus, HandlerError
from .handlers import DATA_ENDPOINTS, HEALTH_CHECK_METHOD
from .models import HealthStatus, UnhealthyStatus, ErrorBody

__all__ = [
    'create_app',
    'ErrorStatus', 'HandlerError',
    'DATA_ENDPOINTS', 'HEALTH_CHECK_METHOD',
    'HealthStatus', 'UnhealthyStatus', 'ErrorBody'
]
