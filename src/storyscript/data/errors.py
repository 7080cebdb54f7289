"""Custom exceptions for script loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when script files are missing or contain invalid JSON."""


class DataValidationError(DataError):
    """Raised when a script document fails structural validation."""
