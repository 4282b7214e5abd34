"""
Gunicorn configuration for the RPS Arena application.
Optimized for Socket.IO with eventlet workers.
"""

import sys
import logging
import yaml
from rps.message_catalog import MessageCatalog, MessageCatalogError
from config_factory import load_config


def on_starting(server):
    """
    Server hook that runs when the master process is starting.
    Validates the message catalog before workers are forked so a broken
    file stops the server instead of every worker.
    """
    logger = logging.getLogger(__name__)
    logger.info("Validating message catalog before starting workers...")
    try:
        catalog = MessageCatalog(app_config.messages_file)
        catalog.load()
        logger.info(f"Successfully validated {catalog.count()} messages.")
    except (FileNotFoundError, yaml.YAMLError, MessageCatalogError) as e:
        logger.critical(f"FATAL: Message catalog validation failed. Server shutting down. Error: {e}")
        sys.exit(1)


# Load configuration (renamed to avoid conflicts with gunicorn's internal 'config')
app_config = load_config()

# Server socket
bind = f"{app_config.host}:{app_config.port}"
backlog = 2048

# Worker processes
workers = 1  # Must be 1: rooms live in process memory and handlers must not run in parallel
worker_class = "eventlet"
worker_connections = app_config.worker_connections
timeout = app_config.timeout
keepalive = app_config.keepalive

# No max_requests: restarting the worker would drop every room

# Logging
accesslog = "-"
errorlog = "-"
loglevel = app_config.log_level
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "rps-arena"

# Server mechanics
preload_app = False  # Don't preload for Socket.IO
daemon = False
pidfile = None
user = None
group = None
tmp_upload_dir = None

# SSL (for production)
keyfile = None
certfile = None
