"""Client Errors: the one exception type callers of the API wrapper handle.

Invariants:
    - ApiError.status_code is the HTTP status of a completed, non-2xx response
    - NetworkError.status_code is always 0: the request never completed
"""


class ApiError(Exception):
    """The API answered with a failure, or could not be reached."""

    def __init__(
        self, status_code: int, message: str, details: list[str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details or []

    @property
    def is_validation_error(self) -> bool:
        return self.status_code == 400 and bool(self.details)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class NetworkError(ApiError):
    """Transport-level failure; no HTTP response was received."""

    def __init__(self, message: str):
        super().__init__(0, message)
