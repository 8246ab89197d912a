"""
Typed error kinds raised by services.
Handled app-wide in main: ValidationError -> 400, NotFoundError -> 404, StorageFailure -> 503,
ContentProviderError -> 502; bodies are ErrorResponse {detail, code}.
"""


class StudyError(ValueError):
    """Base error: `code` is the machine-readable kind, str(e) the human message."""

    code = "error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class ValidationError(StudyError):
    code = "validation_error"


class NotFoundError(StudyError):
    code = "not_found"


class StorageFailure(StudyError):
    code = "storage_failure"


class ContentProviderError(StudyError):
    code = "content_provider_error"
