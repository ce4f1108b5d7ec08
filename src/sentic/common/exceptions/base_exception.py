# File: common/exceptions/base_exception.py

from fastapi import HTTPException, status


class AppHTTPException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

    @property
    def message(self) -> str:
        return str(self.detail)


# Specific custom exceptions using AppHTTPException
class ValidationError(AppHTTPException):
    def __init__(self, detail: str = "Invalid request parameters."):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class UnauthorizedError(AppHTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)

class NotFoundError(AppHTTPException):
    def __init__(self, detail: str = "Resource not found."):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)

class PayloadTooLargeError(AppHTTPException):
    def __init__(self, detail: str = "Payload too large."):
        super().__init__(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail)

class UpstreamClassificationError(AppHTTPException):
    def __init__(self, detail: str = "ML inference failed"):
        super().__init__(status.HTTP_502_BAD_GATEWAY, detail)

class ServiceUnavailableException(AppHTTPException):
    def __init__(self, detail: str = "Service temporarily unavailable. Please try again later."):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail)
