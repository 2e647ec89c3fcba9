class SyncError(Exception):
    """Anything the values client raises."""


class HttpError(SyncError):
    """Non-2xx response. `message` is resolved from the error body."""
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self):
        return f"HttpError(status={self.status}, message={self.message!r})"


class TransportError(SyncError):
    """The request never produced a response (DNS, refused, timeout...)."""


class RequestCancelled(SyncError):
    """The caller's cancel signal fired before the response arrived."""


class DraftValidationError(ValueError):
    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__("Missing required fields: " + ", ".join(self.missing))
