"""
Error Handler for the RPS game server

Decorator giving every socket handler the same error reporting: validation
failures and unexpected exceptions become an 'error' event sent to the
requesting client only.
"""

import logging

from container import get_container
from rps.core.errors import ValidationError

logger = logging.getLogger(__name__)


def with_error_handling(func):
    """
    Decorator for Socket.IO event handlers to provide consistent error handling.

    Args:
        func: Socket.IO event handler function

    Returns:
        Wrapped function with error handling
    """
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            get_container().get('ErrorResponseFactory').emit_validation_error(e)
        except Exception as e:
            factory = get_container().get('ErrorResponseFactory')
            error_code, error_message = factory.handle_exception(e, func.__name__)
            factory.emit_error(error_code, error_message)

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper
