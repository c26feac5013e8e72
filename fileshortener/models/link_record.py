from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LinkRecord:
    """Represent one shortcode to target URL association.

    Attributes:
        shortcode (str):
            The unique short identifier of the link.
        target (str):
            The original long URL that the shortcode redirects to.
        created_at (Optional[datetime]):
            UTC moment the link was created. None for links imported
            from the legacy list format, which never recorded it.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = LinkRecord(
        ...     shortcode="abc123",
        ...     target="https://example.com/article/123",
        ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
        ... )
        >>> link.target
        'https://example.com/article/123'
    """
    shortcode: str
    target: str
    created_at: Optional[datetime] = None
