"""Request parameter access and input sanitization."""

from campaignbridge.http.params import MultiDict, RequestParams
from campaignbridge.http.sanitize import sanitize_value

__all__ = ["MultiDict", "RequestParams", "sanitize_value"]
