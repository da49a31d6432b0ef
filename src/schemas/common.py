"""Response envelopes shared by all routers."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class MessageResponse(BaseModel):
    """Status and message only."""

    status: int = 200
    message: str


class DataResponse(BaseModel, Generic[T]):
    """Status, optional message and a payload."""

    status: int = 200
    message: str | None = None
    data: T


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    status: int
    message: str
