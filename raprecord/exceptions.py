"""
RapRecord exceptions

All RapRecord-specific exceptions inherit from RapRecordError and are turned
into JSON error responses by the handlers registered in create_app().
"""


class RapRecordError(Exception):
    """Base exception for all RapRecord errors."""

    status_code = 500


class MissingURLError(RapRecordError):
    """Request body carried no URL."""

    status_code = 400

    def __init__(self, message: str = "URL is required"):
        super().__init__(message)


class InvalidURLError(RapRecordError):
    """URL did not contain a recognisable video identifier."""

    status_code = 400

    def __init__(self, message: str = "Invalid YouTube URL"):
        super().__init__(message)


class ExtractionError(RapRecordError):
    """Title probe or audio extraction failed."""

    pass


class StorageError(RapRecordError):
    """Metadata document could not be read or written."""

    pass


class ArtifactNotFoundError(RapRecordError):
    """No audio artifact stored for the requested identifier."""

    status_code = 404

    def __init__(self, message: str = "Audio file not found"):
        super().__init__(message)

