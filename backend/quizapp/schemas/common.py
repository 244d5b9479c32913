"""Shared schema building blocks."""

from typing import Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Canonical and submitted answers are strings or numbers; bools are rejected.
AnswerValue = Union[StrictInt, StrictFloat, StrictStr]


class CamelModel(BaseModel):
    """camelCase on the wire and in storage, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
