import logging

from burnclip.exceptions import ConfigurationError, TransientError
from burnclip.dao.exceptions import DataStoreError
from burnclip.exchange import build_exchange
from burnclip.jobs.sweep_expired.constants import SUCCESS, ERROR
from burnclip.types import JobContext, JobEvent, JobResponse
from burnclip.utils import guarantee_error_response


logger = logging.getLogger(__name__)


def response_success(*, reaped: int) -> JobResponse:
    return {
        'status': SUCCESS,
        'reaped': int(reaped),
        'message': f'Swept {reaped} expired clip(s)',
    }


def response_error(*, error: Exception) -> JobResponse:
    return {
        'status': ERROR,
        'message': 'Failed to sweep expired clips',
        'reason': str(error),
        'error': error.__class__.__name__,
    }


@guarantee_error_response
def handler(event: JobEvent, context: JobContext) -> JobResponse:
    """Delete clips that expired without ever being redeemed

    Redeem only notices expiry lazily, so clips nobody asks for again would keep
    their file bytes around until Redis reaps the record. This job is meant to run
    on a schedule (e.g. every 15 minutes) and removes them together with their blobs.

    Procedure:
    - Step 1: Build the exchange for the configured backend
    - Step 2: Sweep expired clips
    - Step 3: Respond with success or error

    Diagnostic responses:
        success:
            status: success
            reaped: <number of clips removed>
            message: Swept <n> expired clip(s)
        error:
            status: error
            message: Failed to sweep expired clips
            reason: <reason>
            error: <error class name> (e.g. TransientError, DataStoreError, MissingEnvironmentVariableError)

    Args:
        event (JobEvent):
            Scheduler event payload (unused).
        context (JobContext):
            Runtime context object (unused).

    Returns:
        JobResponse: Diagnostic response.

    Example:
        >>> handler({}, None)
        {'status': 'success', 'reaped': 3, 'message': 'Swept 3 expired clip(s)'}
    """
    try:
        exchange = build_exchange()
        reaped = exchange.sweep()
    except (ConfigurationError, DataStoreError, TransientError) as error:
        logger.exception(
            'Failed to sweep expired clips.',
            extra={'event': ERROR, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_error(error=error)
    else:
        logger.info('Swept %s expired clip(s).', reaped, extra={'event': SUCCESS, 'reaped': reaped})
        return response_success(reaped=reaped)
