"""Error types raised by the search and listing services."""


class InvalidArgument(ValueError):
    """Search criteria that cannot be resolved (bad pagination or ranges)."""


class NotFound(LookupError):
    """A property or related record does not exist in the listing store."""
