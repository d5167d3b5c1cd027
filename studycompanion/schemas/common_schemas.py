"""Common schemas shared by every resource."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str = Field(..., description="Response message")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Human readable error message")
