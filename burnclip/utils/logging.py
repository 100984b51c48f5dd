"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once in the process entry point (e.g. a job
handler module) before any other logging is done.

Logging format:
{
    "timestamp": "2026-10-17T12:00:00.000Z",
    "level": "INFO",
    "logger": "burnclip.exchange.protocol",
    "message": "Clip sent.",
    "event": "SEND_SUCCESS",
    "code": "K3Q"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from burnclip.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
_STANDARD_ATTRS = frozenset(logging.LogRecord('', 0, '', 0, '', (), None).__dict__) | {'message', 'asctime', 'taskName'}


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras and formatted tracebacks"""

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
