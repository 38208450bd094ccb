class ApplicationError(Exception):
    """Base error for known application failures."""


class LocalValidationError(ApplicationError):
    """Raised when a submission is attempted without a selected image."""


class InfrastructureError(ApplicationError):
    """Raised when an infrastructure adapter fails."""


class DetectionServiceError(InfrastructureError):
    """Raised when the detection service cannot produce a valid detections array."""


class SubmissionInProgressError(ApplicationError):
    """Raised when a submission is started while another one is still in flight."""
