"""Exception hierarchy for masterdesk.

Field-level validation problems are not exceptions; they are reported as
``FieldError`` values by the form session. The exceptions here cover the
remote side: failed requests, failed cache fetches and failed submissions.
"""

from typing import Any


class MasterDeskError(Exception):
    """Base exception for all masterdesk errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RequestFailed(MasterDeskError):
    """Raised by the resource client when the backend call did not succeed.

    ``status_code`` is None when the request never produced a response
    (connection refused, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def __repr__(self) -> str:
        return f"RequestFailed({self.message!r}, status_code={self.status_code!r})"


class FetchError(MasterDeskError):
    """A cache entry's backing request failed."""

    def __init__(self, message: str, key: Any = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.cause = cause


class SubmissionError(MasterDeskError):
    """The create/update call of a form submission failed."""

    def __init__(self, message: str, resource: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.cause = cause
