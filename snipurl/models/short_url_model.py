from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional

from snipurl.types import ShortURLPayload


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
            Never mutated after creation.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        owner_id (Optional[str]):
            Identifier of the authenticated user who created the link.
            None for anonymous links.
        clicks (int):
            Number of recorded redirects through this link.
        created_at (datetime):
            Creation time (timezone-aware, UTC).

    Example:
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="abc123",
        ...     owner_id="user-42",
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.clicks
        0
        >>> url.to_dict()['shortCode']
        'abc123'
    """

    target: str
    shortcode: str
    owner_id: Optional[str] = None
    clicks: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        if not isinstance(self.clicks, int) or isinstance(self.clicks, bool) or self.clicks < 0:
            raise ValueError(f"Click count must be a non-negative integer (given value: {self.clicks!r}).")
        # Naive timestamps are taken as UTC, aware ones are converted
        if self.created_at.tzinfo is None:
            object.__setattr__(self, 'created_at', self.created_at.replace(tzinfo=UTC))
        elif self.created_at.tzinfo is not UTC:
            object.__setattr__(self, 'created_at', self.created_at.astimezone(UTC))

    def to_dict(self) -> ShortURLPayload:
        """Return the public JSON representation of this record."""
        created_at = self.created_at.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        return {
            'shortCode': self.shortcode,
            'originalUrl': self.target,
            'ownerId': self.owner_id,
            'clicks': self.clicks,
            'createdAt': created_at,
        }
