class BatchValidationError(Exception):
    """Raised when a batch payload does not describe documents and matches."""
