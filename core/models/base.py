# =============================================================================
# core/models/base.py - Shared Model Configuration
# =============================================================================
# The frontend speaks camelCase JSON while the database uses snake_case
# columns. CamelModel lets Python code use snake_case attributes and
# serializes/accepts camelCase on the wire.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases that also accepts field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def blank(value: Any) -> bool:
    """True for None and empty or whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
