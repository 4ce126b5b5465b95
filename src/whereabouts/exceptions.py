"""
Custom exceptions for the whereabouts application.
"""

class WhereaboutsException(Exception):
    """Base exception for the application."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ConfigurationError(WhereaboutsException):
    """Raised when a required setting is missing or invalid."""
    pass

class InvalidSeedError(WhereaboutsException):
    """Raised when the search is started without any people or places to expand."""
    pass

class SearchExhaustedError(WhereaboutsException):
    """Raised when both frontiers ran dry without locating the target."""
    pass

class SearchAbortedError(WhereaboutsException):
    """Raised when the search hit its request budget or deadline."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Search aborted: {reason}")

class OracleResponseError(WhereaboutsException):
    """Raised when an oracle reply cannot be decoded."""
    pass

class SeedFetchError(WhereaboutsException):
    """Raised when the seed note cannot be downloaded."""
    pass

class ExtractionError(WhereaboutsException):
    """Raised when names and places cannot be extracted from the seed note."""
    pass

class ReportSubmissionError(WhereaboutsException):
    """Raised when the answer could not be delivered to the report endpoint."""
    pass

class TaskStepError(WhereaboutsException):
    """Wraps a failure with the name of the pipeline step that produced it."""
    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"Task failed at step {step}: {cause}")
