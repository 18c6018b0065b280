"""Custom exceptions for the project ideator."""

class IdeatorError(Exception):
    """Base exception for all ideator errors."""
    pass

class ProviderNotConfiguredError(IdeatorError):
    """Raised when the generative service is not configured."""
    pass

class ServiceError(IdeatorError):
    """Raised when a call to the generative service fails."""
    pass

class TimelineSchemaError(IdeatorError):
    """Raised when a timeline payload does not match its schema."""
    pass

class ImportValidationError(IdeatorError):
    """Raised when an imported project file is missing required fields."""
    pass

class InvalidTransitionError(IdeatorError):
    """Raised when an action is dispatched from a view that does not allow it."""
    pass
