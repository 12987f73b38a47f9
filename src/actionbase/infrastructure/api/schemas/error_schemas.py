"""Pydantic schemas for error responses."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every ActionBaseError."""

    error: str = Field(..., description="Error class name, e.g. 'NoResourceFoundError'")
    message: str = Field(..., description="Human readable message")
