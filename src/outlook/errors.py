"""Error type shared by the Outlook client modules."""


class OutlookError(Exception):
    """Raised when authentication, transport or a Graph call fails.

    ``status_code`` is set when the failure came from an HTTP response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
