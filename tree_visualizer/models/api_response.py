"""API request and response data models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tree_visualizer.models.syntax import SyntaxElement


class ParseRequest(BaseModel):
    """Source text to parse and visualize."""

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(alias="Content")
    language: Optional[str] = Field(default=None, alias="Language")
    normalize_newlines: bool = Field(default=False, alias="NormalizeNewLines")


class VisualizeRequest(BaseModel):
    """Pre-built syntax tree to visualize."""

    model_config = ConfigDict(populate_by_name=True)

    root: SyntaxElement = Field(alias="Root")


class DebugOutput(BaseModel):
    """Debug rendering of a parsed tree."""

    model_config = ConfigDict(populate_by_name=True)

    output: str = Field(alias="Output")


class LanguageInfo(BaseModel):
    """Supported language and its file extensions."""

    name: str
    file_extensions: List[str]
