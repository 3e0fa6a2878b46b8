"""
In-memory syntax tree models.

A syntax tree held by the caller is a tagged union of blocks (containers)
and tokens (leaves). Tokens may carry internal ``parts`` which are never
walked into.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field


class SyntaxToken(BaseModel):
    """Leaf node of an in-memory syntax tree."""

    kind: Literal["token"] = "token"
    text: str
    start: int = Field(ge=0)
    length: int = Field(ge=0)
    parts: List['SyntaxToken'] = []


class SyntaxBlock(BaseModel):
    """Container node of an in-memory syntax tree."""

    kind: Literal["block"] = "block"
    text: str
    start: int = Field(ge=0)
    length: int = Field(ge=0)
    children: List['SyntaxElement'] = []


SyntaxElement = Annotated[Union[SyntaxBlock, SyntaxToken], Field(discriminator="kind")]


# Enable forward references for recursive models
SyntaxToken.model_rebuild()
SyntaxBlock.model_rebuild()
