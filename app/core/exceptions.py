from typing import List, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DraftValidationError(ServiceError):
    """A draft failed local validation. Nothing was sent upstream."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UpstreamError(ServiceError):
    """The school backend rejected a call or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        upstream_status: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.upstream_status = upstream_status


class PartialSaveError(UpstreamError):
    """A multi-call save stopped at its first failure. Applied steps are not rolled back."""

    def __init__(self, cause: UpstreamError, completed: List[str]) -> None:
        super().__init__(cause.message, cause.status_code, cause.upstream_status)
        self.completed = completed


class EditorBusyError(ServiceError):
    def __init__(self, message: str = "A save is already in progress") -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)
