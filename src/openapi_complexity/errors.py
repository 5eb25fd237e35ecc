"""Errors surfaced to callers when a document cannot be analyzed."""


class AnalysisError(Exception):
    """Base class for failures that reject the whole input document."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(AnalysisError):
    """The text is neither valid JSON nor valid YAML."""


class InvalidSpecError(AnalysisError):
    """The decoded document has no ``openapi`` or ``swagger`` marker."""
