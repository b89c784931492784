"""Error definitions for the post store and its callers."""


class InkwellError(Exception):
    """Base Inkwell error."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ConfigurationError(InkwellError):
    """Required store configuration is missing. Raised at startup."""

    pass


class NotFoundError(InkwellError):
    """No record matches the requested id, slug or composite key."""

    pass


class ValidationError(InkwellError):
    """Caller input was rejected before reaching the store."""

    pass


class InternalError(InkwellError):
    """The store failed (connectivity, timeout, permissions)."""

    pass
