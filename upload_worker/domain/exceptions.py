"""Domain exceptions raised while processing upload requests."""

from typing import Optional


class DomainException(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class UploadProcessingException(DomainException):
    """Base exception for upload-request processing errors."""


class MalformedRequest(UploadProcessingException):
    """Inbound message is missing a field or carries an invalid one."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(
            f"Malformed upload request, {field}: {reason}", "MALFORMED_REQUEST"
        )


class UploadFailed(UploadProcessingException):
    """External upload operation raised an error."""

    def __init__(self, resource_type: str, cause: BaseException):
        self.resource_type = resource_type
        self.cause = cause
        super().__init__(
            f"Upload of {resource_type} failed: {cause}", "UPLOAD_FAILED"
        )


class ResourceCleanupFailed(UploadProcessingException):
    """Temporary file could not be deleted."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(
            f"Could not delete temporary file {path}: {cause}",
            "RESOURCE_CLEANUP_FAILED",
        )


class PublishFailed(UploadProcessingException):
    """Response could not be sent to the response channel."""

    def __init__(self, destination: str, cause: BaseException):
        self.destination = destination
        self.cause = cause
        super().__init__(
            f"Failed to publish response to {destination}: {cause}",
            "PUBLISH_FAILED",
        )
