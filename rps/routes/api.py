"""
REST API endpoints for the RPS game server.
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint

logger = logging.getLogger(__name__)

_started_at = time.monotonic()


def create_api_blueprint(services):
    """Create and configure the API Blueprint with service dependencies."""
    room_registry = services['room_registry']

    api = Blueprint('api', __name__)

    @api.route('/health')
    def health():
        """Liveness probe with a little runtime information."""
        return {
            'status': 'ok',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'uptime': round(time.monotonic() - _started_at, 3),
            'rooms': room_registry.count()
        }

    return api
