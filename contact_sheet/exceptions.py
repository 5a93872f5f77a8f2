"""Exceptions for contact-sheet module."""


class ContactSheetError(Exception):
    """Base exception for contact-sheet."""
    pass


class ValidationError(ContactSheetError):
    """Input validation error. Deterministic, never retried."""
    pass


class InvalidRange(ValidationError):
    """Start/end ordering or bounds violated."""
    pass


class EmptyRange(InvalidRange):
    """Resolved sample count would be zero."""
    pass


class InvalidInterval(ValidationError):
    """Sampling interval is not positive."""
    pass


class InvalidLimit(ValidationError):
    """Frame limit is not positive or unreachable."""
    pass


class InvalidGrid(ValidationError):
    """Non-positive columns, rows or canvas dimension."""
    pass


class InvalidStyling(ValidationError):
    """Bad font size, border thickness or color value."""
    pass


class InvalidConfiguration(ValidationError):
    """Invalid video metadata or output settings."""
    pass


class InvalidTimeFormat(ValidationError):
    """Time string does not match the expected format."""
    pass


class ConfigError(ContactSheetError):
    """Configuration file error."""
    pass


class VideoFileError(ContactSheetError):
    """Video file operation error."""
    pass


class ProcessingError(ContactSheetError):
    """Frame extraction or rendering error."""
    pass
