"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    get_user_id(event: LambdaEvent) -> str | None:
        Authenticated user id from the API Gateway authorizer claims.

Example:
    >>> from snipurl.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from snipurl.types import LambdaEvent
from snipurl.constants import ENV


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def get_user_id(event: LambdaEvent) -> str | None:
    """Return the Cognito 'sub' claim of the caller, or None for anonymous requests.

    Example:
        >>> get_user_id({'requestContext': {'authorizer': {'claims': {'sub': 'user123'}}}})
        'user123'
        >>> get_user_id({}) is None
        True
    """
    authorizer = (event.get('requestContext') or {}).get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    return claims.get('sub') or None
