"""Exceptions raised by Data Access Objects (DAO)

DAO errors are part of the application's error taxonomy (see snipurl.exceptions)
and carry an `error_code` like every other SnipURLError. Record-level errors
keep the offending shortcode or owner on the instance, so callers can log it
without parsing messages.

Classes:
    DAOError:
        Base class for DAO errors.
    ShortURLNotFoundError(shortcode):
        No record is stored under the shortcode.
    ShortURLAlreadyExistsError(shortcode):
        The shortcode is taken (insert lost a uniqueness check).
    DataStoreError:
        The data store is unreachable or timed out.
    UnsupportedOperationError:
        The data store refused a primitive (e.g. scripting disabled by ACL).
    ScopeViolationError(scope, owner_id):
        A DAO scoped to one owner was asked to act for another.

Example:
    >>> from snipurl.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError('abc123')
    Traceback (most recent call last):
        ...
    snipurl.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""

from typing import Optional

from snipurl.exceptions import SnipURLError


class DAOError(SnipURLError):
    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    error_code = 'dao:short_url_not_found_error'

    def __init__(self, shortcode: str):
        super().__init__(f"Short URL with code '{shortcode}' not found.")
        self.shortcode = shortcode


class ShortURLAlreadyExistsError(DAOError):
    error_code = 'dao:short_url_already_exists_error'

    def __init__(self, shortcode: str):
        super().__init__(f"Short URL with code '{shortcode}' already exists.")
        self.shortcode = shortcode


class DataStoreError(DAOError):
    """Connection failures, timeouts, OOM and similar data store outages."""

    error_code = 'dao:data_store_error'


class UnsupportedOperationError(DAOError):
    error_code = 'dao:unsupported_operation_error'


class ScopeViolationError(DAOError):
    error_code = 'dao:scope_violation_error'

    def __init__(self, scope: Optional[str], owner_id: Optional[str]):
        super().__init__(f"DAO scoped to owner '{scope}' can't act on behalf of owner '{owner_id}'.")
        self.scope = scope
        self.owner_id = owner_id
