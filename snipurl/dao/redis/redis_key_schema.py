"""Redis key layout for short URL records

    <prefix>:links:<shortcode>         HASH  target, clicks, created_at[, owner_id]
    <prefix>:users:<owner_id>:links    ZSET  owner index, shortcode scored by creation time

The prefix is optional and namespaces every key per app and environment,
e.g. "snipurl:prod" or "snipurl:dev".
"""

import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator namespaced from imports

SEPARATOR = ':'


def namespaced(func: Callable[..., tuple[str, ...]]) -> Callable[..., str]:
    """Join the key parts returned by `func`, behind the schema's prefix."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        parts = func(self, *args, **kwargs)
        for part in parts:
            if not part or SEPARATOR in part:
                raise ValueError(f'Key part must be a non-empty string without {SEPARATOR!r} (given value: {part!r}).')
        if self.prefix is not None:
            parts = (self.prefix, *parts)
        return SEPARATOR.join(parts)

    return wrapper


class RedisKeySchema:
    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @namespaced
    def link_key(self, shortcode: str) -> tuple[str, ...]:
        return 'links', shortcode

    @namespaced
    def user_links_key(self, owner_id: str) -> tuple[str, ...]:
        return 'users', owner_id, 'links'
