"""
Custom exception classes for openspec2html.
"""


class OpenSpecError(Exception):
    """Base exception for all openspec2html errors."""
    pass


class DocumentNotFoundError(OpenSpecError, FileNotFoundError):
    """The markdown file does not exist."""
    pass


class DocumentReadError(OpenSpecError, OSError):
    """The markdown file exists but its contents could not be read."""
    pass


class ImporterError(OpenSpecError):
    """Error related to the source directory of a bulk import."""
    pass


class ConversionError(OpenSpecError):
    """Error while writing converted output."""
    pass


class SecurityError(OpenSpecError):
    """Error related to security validation (size limits, etc.)."""
    pass
