from __future__ import annotations


class VideoGatewayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(VideoGatewayError):
    status_code = 400


class RangeRequiredError(ValidationError):
    def __init__(self, message: str = "Range header is required") -> None:
        super().__init__(message)


class RangeNotSatisfiableError(ValidationError):
    status_code = 416

    def __init__(self, total_size: int) -> None:
        super().__init__("Requested range not satisfiable")
        self.total_size = total_size


class NotFoundError(VideoGatewayError):
    status_code = 404


class UpstreamError(VideoGatewayError):
    status_code = 502


class PersistenceError(VideoGatewayError):
    status_code = 500
