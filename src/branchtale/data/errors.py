"""Custom exceptions for loading story definitions."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a story file is missing, unreadable or not JSON."""


class DataValidationError(DataError):
    """Raised when story content fails structural validation."""
