"""Shared result types for the generation agents."""
from typing import Literal, Union

from pydantic import BaseModel


class Generated(BaseModel):
    kind: Literal["generated"] = "generated"
    text: str
    source: Literal["llm", "llm+chunks", "llm+upstream"] = "llm"


class Fallback(BaseModel):
    kind: Literal["fallback"] = "fallback"
    text: str
    reason: str


Generation = Union[Generated, Fallback]


__all__ = ["Fallback", "Generated", "Generation"]
