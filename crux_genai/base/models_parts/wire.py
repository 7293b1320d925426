"""
Shared pydantic base for wire payloads.

The service speaks camelCase JSON; Python code uses snake_case attributes.
Unknown keys are kept so that newer service fields survive a decode/encode
round trip through history.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for all request/response payload objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        protected_namespaces=(),
    )

    def to_wire(self) -> Dict[str, Any]:
        """Return the camelCase JSON-ready mapping, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


__all__ = ["WireModel"]
