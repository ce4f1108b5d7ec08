from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginAdminRequest(BaseModel):
    username: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Admin username",
        examples=["admin"]
    )
    password: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Admin password"
    )

    model_config = ConfigDict(
        str_strip_whitespace=True,
    )


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = Field(
        default=None,
        description="New status: open, resolved or flagged",
        examples=["resolved"]
    )
