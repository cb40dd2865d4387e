"""Common types shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose JSON contract uses camelCase keys.

    Attributes stay snake_case in Python; `model_dump(by_alias=True)` and
    FastAPI responses emit the camelCase names, and both spellings are
    accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StaffRoleName(str, Enum):
    """Staff member a set of extra days belongs to."""

    guide = "guide"
    driver = "driver"


class ExtraDaysSide(str, Enum):
    """Which side of the tour an extra-day window sits on."""

    before = "before"
    after = "after"
