"""Shared Pydantic configuration for the suggestion schemas.

Every schema reads and writes camelCase on the wire while Python code uses
snake_case attributes. Pick the base by direction:

    - APIRequest: caller input such as query parameters or event bodies
    - APIResponse: suggestions, analytics and cache entries we produce
    - DownstreamResponse: inventory snapshots read from collaborators
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Common configuration. Inherit from a public subclass instead."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
    )


class APIRequest(_BaseSchema):
    """Caller input; unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Engine output; unknown fields are rejected so cached payloads stay exact."""

    model_config = ConfigDict(extra="forbid")


class DownstreamResponse(_BaseSchema):
    """Collaborator data; fields we do not model are dropped."""

    model_config = ConfigDict(extra="ignore")
