"""
Base Handler Classes

This module provides base classes for Socket.IO handlers with common patterns
for service access, payload validation and logging.
"""

import logging
from abc import ABC
from typing import Any, Optional

from flask import request
from flask_socketio import emit

from container import get_container

logger = logging.getLogger(__name__)


class BaseHandler(ABC):
    """
    Abstract base class for all Socket.IO handlers.

    Provides common functionality like service access, the requesting
    connection's ID, and standardized logging.
    """

    def __init__(self):
        self._container = get_container()

    @property
    def coordinator(self):
        """Get the session coordinator."""
        return self._container.get('SessionCoordinator')

    @property
    def validation_service(self):
        """Get the validation service."""
        return self._container.get('ValidationService')

    @property
    def sid(self) -> str:
        """Connection ID of the client that sent the current event."""
        return request.sid  # type: ignore[attr-defined]

    def emit_signal(self, event_name: str) -> None:
        """Emit a payload-less event to the requesting client."""
        emit(event_name)

    def log_handler_start(self, handler_name: str, data: Any = None) -> None:
        """Log the start of handler execution."""
        logger.info(f'{handler_name} called by client: {self.sid}')
        if data is not None:
            logger.debug(f'{handler_name} data: {data}')

    def log_handler_success(self, handler_name: str, message: Optional[str] = None) -> None:
        """Log successful handler completion."""
        log_msg = f'{handler_name} completed successfully for client: {self.sid}'
        if message:
            log_msg += f' - {message}'
        logger.info(log_msg)
