"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies
    - DownstreamRequest: For payloads sent to the storage/assistant platform
    - DownstreamResponse: For payloads received from that platform
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas; only declared fields leave."""

    model_config = ConfigDict(extra="forbid")


class DownstreamRequest(BaseModel):
    """Payload sent to the hosted platform, serialized with field names as-is."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class DownstreamResponse(BaseModel):
    """Payload received from the hosted platform; new fields must not break parsing."""

    model_config = ConfigDict(extra="ignore")
