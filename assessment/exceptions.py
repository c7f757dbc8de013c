"""Custom exception hierarchy for the assessment pipeline."""


class AssessmentError(Exception):
    """Base exception for assessment pipeline errors."""


class ConfigError(AssessmentError):
    """Raised when configuration is invalid or incomplete."""


class AcquisitionError(AssessmentError):
    """Raised when acquiring or downloading a document fails."""


class ExtractionError(AssessmentError):
    """Raised when text cannot be extracted from a document payload."""


class FrameworkInvariantError(AssessmentError):
    """Raised when capped framework weights exceed the 10-point budget."""


class InvalidAnalysisResponse(AssessmentError):
    """Raised when the language-model response cannot be validated."""
