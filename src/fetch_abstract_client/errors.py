"""
Exceptions raised by fetch_abstract_client.
"""


class ConfigurationError(Exception):
    """Raised when a request has no usable URL and no base address is set."""
    pass


MISSING_BASE_ADDRESS = (
    "The request URL must either be an absolute URL or base_address must be set"
)
