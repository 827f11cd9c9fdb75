from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class CamelModel(BaseModel):
    """Serializes with the camelCase keys the browser client expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
