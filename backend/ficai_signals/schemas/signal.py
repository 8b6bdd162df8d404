"""Signal Schemas: patch body and aggregated tag responses.

Invariants:
    - url: 1-2048 chars
    - Tags are stripped, 1-200 chars; add/rm/erase default to empty lists
    - Response keys: tag, signal, signalsFor, signalsAgainst
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

Url = Annotated[str, StringConstraints(min_length=1, max_length=2048)]
Tag = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200),
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignalPatch(_CamelModel):
    """PATCH /v1/signals body."""
    url: Url
    add: list[Tag] = Field(default_factory=list, max_length=500)
    rm: list[Tag] = Field(default_factory=list, max_length=500)
    erase: list[Tag] = Field(default_factory=list, max_length=500)


class TagSignalResponse(_CamelModel):
    tag: str
    signal: bool | None
    signals_for: int
    signals_against: int


class SignalsResponse(_CamelModel):
    tags: list[TagSignalResponse]


class TagsResponse(BaseModel):
    tags: list[str]
