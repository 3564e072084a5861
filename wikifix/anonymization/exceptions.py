class AnonymizationError(Exception):
    """Raised when anonymization fails for a reason other than bad markup."""
