"""Helper utilities for AWS lambda functions.

Functions:
    base_url(event, configured=None) -> str
        Public base URL: the configured one, or extracted from the API Gateway event
    get_short_url(shortcode, base) -> str
        Get string representation of short URL for a given shortcode
    error_page_url(base, reason) -> str
        Front page URL used when a redirect can't be served
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from snipurl.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url(event, configured='https://sn.ip/')
        'https://sn.ip'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
from typing import Any
from collections.abc import Callable

from snipurl.constants import UNKNOWN_INTERNAL_SERVER_ERROR, ErrorPage
from snipurl.exceptions import MissingEnvironmentVariableError
from snipurl.utils.runtime import running_locally
from snipurl.utils.responses import response_500


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any], configured: str | None = None) -> str:
    """Return the public base URL for the current Lambda invocation.

    A configured base URL always wins. Otherwise it is derived from the event;
    works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        configured (str | None): base URL from the application configuration

    Returns:
        str: Base URL without a trailing slash, e.g.:
             - "https://sn.ip"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, base: str) -> str:
    """Get string representation of shortened URL

    Example:
        >>> get_short_url('abc123', 'https://sn.ip/')
        'https://sn.ip/abc123'
    """
    return f'{base.rstrip("/")}/{shortcode}'


def error_page_url(base: str, reason: ErrorPage) -> str:
    """Get the front page URL that explains why a redirect failed

    Example:
        >>> error_page_url('https://sn.ip', ErrorPage.NOT_FOUND)
        'https://sn.ip/?error=not_found'
    """
    return f'{base.rstrip("/")}/?error={reason}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 instead of crashing on unexpected exceptions.

    When running locally the original exception is re-raised, so SAM shows the
    full traceback.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
