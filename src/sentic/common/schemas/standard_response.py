# File: common/schemas/standard_response.py

from typing import Any, Optional

from pydantic import BaseModel, Field


class StandardResponse(BaseModel):
    success: bool = Field(True, description="Whether the request succeeded")
    message: str = Field(..., description="Descriptive message for response.")
    data: Optional[Any] = Field(None, description="Payload or result")

    @staticmethod
    def ok(data: Any = None, message: str = "OK"):
        return StandardResponse(success=True, message=message, data=data)


class ErrorResponse(BaseModel):
    success: bool = False
    message: str = Field(..., examples=["Report not found"])
    details: Optional[Any] = Field(None, description="Debug information, omitted in production")

    @staticmethod
    def from_exception(message: str, details: Any = None, debug: bool = True):
        return ErrorResponse(message=message, details=details if debug else None)


class AdminSummary(BaseModel):
    id: str
    username: str


class LoginResult(BaseModel):
    token: str = Field(..., description="Signed admin JWT")
    admin: AdminSummary
