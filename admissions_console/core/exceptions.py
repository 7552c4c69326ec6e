class NotFoundError(ValueError):
    """Raised when a configuration record, template or section does not exist."""
