"""Helper utilities shared across the exchange and its jobs.

Functions:
    utc_now() -> datetime
        Current wall-clock time as a timezone-aware UTC datetime
    guarantee_error_response(func) -> Callable
        Decorator: turn unexpected job failures into an error response
"""

import functools
import logging
from datetime import datetime, UTC
from collections.abc import Callable

from burnclip.constants import UNKNOWN_INTERNAL_ERROR
from burnclip.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def guarantee_error_response(func: Callable) -> Callable:
    """Decorator: respond with a diagnostic error payload instead of crashing a job

    When running locally the exception is re-raised so it surfaces in the console.

    Example:
        >>> @guarantee_error_response
        ... def handler(event, context):
        ...     raise RuntimeError('boom')
        >>> handler({}, None)
        {'status': 'error', 'error_code': 'UNKNOWN_INTERNAL_ERROR', 'message': 'Internal Error'}
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in job handler.', extra={'event': UNKNOWN_INTERNAL_ERROR})
            return {
                'status': 'error',
                'error_code': UNKNOWN_INTERNAL_ERROR,
                'message': 'Internal Error',
            }

    return wrapper
