"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys (accepts snake_case too)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(BaseModel):
    """Acknowledgement for commands with nothing to return."""

    ok: bool = True
