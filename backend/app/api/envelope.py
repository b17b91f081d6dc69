"""Uniform success/error response envelope."""

from typing import Any, Generic, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    """Body of every successful response."""

    success: bool = True
    message: str
    data: T | None = None


class ErrorEnvelope(BaseModel):
    """Body of every failed response."""

    success: bool = False
    message: str


def success(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Build `{success: true, message, data}` with the given status."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data)},
    )


def error(message: str, status_code: int) -> JSONResponse:
    """Build `{success: false, message}` with the given status."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )
