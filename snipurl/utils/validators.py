"""Target URL validation

A target URL must be an absolute URI with a network location, e.g.
"https://example.com/path?q=1". Relative references, opaque URIs without an
authority ("mailto:me@example.com", "ftp:/bad-uri") and free text are rejected.

Functions:
    is_valid_url(url) -> bool
    validate_url(url) -> str
"""

import re
import urllib.parse

from snipurl.constants import Limits
from snipurl.exceptions import InvalidURLError


# RFC 3986, section 3.1: scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*$')
FORBIDDEN_CHARS = re.compile(r'[\s\x00-\x1f\x7f<>"{}|\\^`]')


def validate_url(url: object) -> str:
    """Return `url` unchanged if it is a well-formed absolute URI.

    Raises:
        InvalidURLError: describing the first problem found.

    Example:
        >>> validate_url('https://example.com/very/long/path')
        'https://example.com/very/long/path'
        >>> validate_url('not a url')
        Traceback (most recent call last):
            ...
        snipurl.exceptions.InvalidURLError: URL must not contain whitespace or control characters
    """
    if not isinstance(url, str) or not url:
        raise InvalidURLError('URL is required')
    if len(url) > Limits.MAX_URL_LENGTH:
        raise InvalidURLError(f'URL is too long (max {Limits.MAX_URL_LENGTH} characters)')
    if FORBIDDEN_CHARS.search(url):
        raise InvalidURLError('URL must not contain whitespace or control characters')

    try:
        components = urllib.parse.urlsplit(url)
        hostname = components.hostname
        components.port  # raises ValueError on a non-numeric or out of range port
    except ValueError as e:
        raise InvalidURLError(f'Invalid URL format: {e}') from e

    if not components.scheme or not SCHEME.match(components.scheme):
        raise InvalidURLError('URL must be absolute (missing or invalid scheme)')
    if not components.netloc or not hostname:
        raise InvalidURLError('URL must have a valid host')
    return url


def is_valid_url(url: object) -> bool:
    """Return True if `url` is a well-formed absolute URI, False otherwise."""
    try:
        validate_url(url)
    except InvalidURLError:
        return False
    return True
