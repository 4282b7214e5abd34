"""
RPS Arena - A two-player real-time rock-paper-scissors game server.
Main Flask application entry point focusing on app creation, dependency injection, and service wiring.
"""

from flask import Flask
from flask_socketio import SocketIO
import logging
import atexit
import sys
import yaml

from container import configure_container
from config_factory import load_config, ConfigurationFactory
from rps.message_catalog import MessageCatalogError

# Initialize Flask app
app = Flask(__name__)

# Load and apply configuration
app_config = load_config()
config_factory = ConfigurationFactory()
app.config.update(config_factory.get_flask_config())

# Initialize Socket.IO; CORS is an explicit allowlist in production, permissive otherwise
socketio = SocketIO(
    app,
    cors_allowed_origins=app_config.socketio_cors,
    async_mode=app_config.async_mode,
    ping_timeout=app_config.ping_timeout,
    ping_interval=app_config.ping_interval
)

# Configure logging
logging.basicConfig(level=getattr(logging, app_config.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Configure service container with dependencies
container = configure_container(socketio=socketio, config=config_factory.to_dict())
missing = container.validate_dependencies()
if missing:
    logger.critical(f"FATAL: Unresolvable service dependencies: {missing}")
    sys.exit(1)
logger.debug(f"Registered services: {', '.join(container.get_service_names())}")

# Messages are attached to every error and opponentLeft event, so a broken catalog is fatal
try:
    message_catalog = container.get('MessageCatalog')
    message_catalog.load()
except (FileNotFoundError, yaml.YAMLError, MessageCatalogError) as e:
    logger.critical(f"FATAL: Message catalog validation failed. Server shutting down. Error: {e}")
    sys.exit(1)

# Register REST endpoints
from rps.routes.api import create_api_blueprint
api_services = {
    'room_registry': container.get('RoomRegistry')
}
app.register_blueprint(create_api_blueprint(api_services))

# Register Socket.IO handlers
from rps.handlers.socket_handlers import register_socket_handlers
register_socket_handlers(socketio)


def cleanup_on_exit():
    """Log shutdown; rooms are volatile and nothing needs persisting."""
    registry = container.get('RoomRegistry')
    logger.info(f"Shutting down RPS Arena server ({registry.count()} active rooms dropped)")


atexit.register(cleanup_on_exit)

if __name__ == '__main__':
    logger.info(f"Starting RPS Arena server on {app_config.host}:{app_config.port}")
    try:
        socketio.run(app, host=app_config.host, port=app_config.port, debug=app_config.debug)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
