"""Storage contract for short URL records.

Every backend (Redis today) implements ShortURLBaseDAO. Services and handlers
depend on this contract only, and receive a DAO already scoped to the caller
from `snipurl.dao.factory.short_url_dao()`.

Scoping rules:
    - A DAO acts for exactly one owner (`owner_id`), or for anonymous callers (None).
    - insert() only accepts records of that owner; list_by_owner() only lists them.
    - get(), increment_clicks() and set_clicks() are unscoped: any caller can
      follow any link, and every redirect counts.

Failure reporting:
    Implementations never hide failures. Outages surface as DataStoreError, a
    refused atomic primitive as UnsupportedOperationError, so click accounting
    can pick its fallback precisely.

Example:
    >>> dao = short_url_dao(app_config, user_id='user-42')
    >>> dao.insert(ShortURLModel(target='https://example.com/a', shortcode='a1b2c3', owner_id='user-42'))
    >>> dao.increment_clicks('a1b2c3')
    1
    >>> [u.shortcode for u in dao.list_by_owner('user-42')]
    ['a1b2c3']
"""

from abc import ABC, abstractmethod
from typing import Optional

from snipurl.models import ShortURLModel
from snipurl.dao.exceptions import ScopeViolationError


class ShortURLBaseDAO(ABC):
    owner_id: Optional[str] = None

    def _authorize(self, owner_id: Optional[str]) -> None:
        if owner_id != self.owner_id:
            raise ScopeViolationError(self.owner_id, owner_id)

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Store a new record, failing if its shortcode is taken.

        The existence check and the write must be atomic: of two concurrent
        inserts with the same shortcode, exactly one succeeds.

        Raises:
            ShortURLAlreadyExistsError, ScopeViolationError, DataStoreError
        """

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Return the record stored under `shortcode`.

        Raises:
            ShortURLNotFoundError, DataStoreError
        """

    @abstractmethod
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        """Add one click server-side and return the new count.

        Concurrent increments must all be reflected, and an unknown shortcode
        must not be created as a side effect.

        Raises:
            ShortURLNotFoundError, UnsupportedOperationError, DataStoreError
        """

    @abstractmethod
    def set_clicks(self, shortcode: str, clicks: int, **kwargs) -> 'ShortURLBaseDAO':
        """Overwrite the click count of an existing record.

        NOTE: plain write, not compare-and-set. Only the click accounting
              fallback uses it.

        Raises:
            ValueError (negative clicks), ShortURLNotFoundError, DataStoreError
        """

    @abstractmethod
    def list_by_owner(self, owner_id: str, limit: int = 50, **kwargs) -> list[ShortURLModel]:
        """Return up to `limit` records of `owner_id`, newest first.

        Raises:
            ScopeViolationError, DataStoreError
        """
