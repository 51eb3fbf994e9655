"""
Error taxonomy shared by services and the API layer.

Services raise these; the API renders them as {"error": message} with the
carried status code.
"""

from typing import Optional

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class DispatchError(Exception):
    """Base error with a caller-safe message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(DispatchError):
    """Input rejected before any state was written."""

    status_code = 400


class NotFoundError(DispatchError):
    """Referenced record does not exist."""

    status_code = 404


class GenerationError(DispatchError):
    """The text generation service failed or returned unusable output."""

    status_code = 500


class EmptyGenerationError(GenerationError):
    """Generation returned no text after trimming."""


class VoiceAnalysisParseError(GenerationError):
    """Voice analysis output could not be parsed into a profile."""
