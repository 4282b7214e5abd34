"""
Services package for the RPS game server

Contains the transport-facing and boundary services used by the handlers
and the session coordinator.
"""

from .broadcast_service import BroadcastService
from .deferred_task_queue import DeferredTaskQueue
from .error_response_factory import ErrorResponseFactory
from .validation_service import ValidationService

__all__ = [
    'BroadcastService',
    'DeferredTaskQueue',
    'ErrorResponseFactory',
    'ValidationService'
]
