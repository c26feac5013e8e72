from typing import Any

from fileshortener.models import LinkRecord


# In-memory representation of the whole durable store (shortcode -> record)
LinkStore = dict[str, LinkRecord]

# Change token of the durable store, see LinkBaseDAO.fingerprint()
StoreFingerprint = tuple[int, int, int]

# Type aliases for handler payloads (API Gateway proxy format)
HandlerEvent = dict[str, Any]
HandlerContext = Any
HandlerResponse = dict[str, Any]
