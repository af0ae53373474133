from utils.error.base_custom_error import BaseCustomError


class IssueContinuityError(BaseCustomError):
    """
    Base exception class for issue continuity analysis errors.
    """

    pass


class IssueExportError(IssueContinuityError):
    """
    Raised when an issue export file cannot be read or has an unexpected shape.
    """

    def __init__(self, message: str = "Invalid issue export", **metadata):
        super().__init__(message, **metadata)
