"""
Error taxonomy for ride analysis.

Only ParseError and ValidationError reach the caller. External service and
configuration errors are recovered locally and degrade enrichment output.
"""


class RideAnalysisError(Exception):
    """Base ride analysis error."""
    pass


class ParseError(RideAnalysisError):
    """Track document is malformed or has no usable points."""
    pass


class ValidationError(RideAnalysisError):
    """Track is well-formed but cannot be analysed (e.g. a single point)."""
    pass


class ExternalServiceError(RideAnalysisError):
    """Timeout, non-2xx response or unusable payload from a third-party API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(RideAnalysisError):
    """A provider is missing a required credential."""
    pass
