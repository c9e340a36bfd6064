class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when a time-rule configuration is malformed or inconsistent."""


class PunchFormatError(DomainError):
    """Raised when a single punch cannot be read (bad timestamp, wrong day)."""
