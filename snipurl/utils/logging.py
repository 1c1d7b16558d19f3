"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Records are written to stdout, one JSON object per line, so CloudWatch Logs
Insights can query every `extra` field directly:

{
    "timestamp": "2025-10-15T08:00:00.000Z",
    "level": "INFO",
    "logger": "snipurl.lambdas.redirect_url.app",
    "message": "Redirecting client to target URL. Responding with 302.",
    "function": "snipurl-redirect-url",
    "env": "prod",
    "shortcode": "V1StGX",
    "event": "REDIRECT_SUCCESS"
}

Environment:
    LOG_LEVEL   : root level (default INFO)
    LOG_FORMAT  : 'json' (default) or 'text' for readable local output
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from snipurl.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra`
RESERVED_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}

# Third-party loggers that are noisy at INFO/DEBUG
QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


class LambdaContextFilter(logging.Filter):
    """Stamp records with the Lambda function name and application environment."""

    def __init__(self):
        super().__init__()
        self.function = os.getenv('AWS_LAMBDA_FUNCTION_NAME')
        self.env = os.getenv(ENV.App.APP_ENV, 'local').lower()

    def filter(self, record: logging.LogRecord) -> bool:
        if self.function is not None:
            record.function = self.function
        record.env = self.env
        return True


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    log_format = os.getenv(ENV.App.LOG_FORMAT, 'json').lower()

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'filters': {
                'lambda_context': {
                    '()': LambdaContextFilter,
                }
            },
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                },
                'text': {
                    'format': '%(asctime)s %(levelname)-8s %(name)s: %(message)s',
                },
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'text' if log_format == 'text' else 'json',
                    'filters': ['lambda_context'],
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
