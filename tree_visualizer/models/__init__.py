"""Data models for the syntax tree visualizer."""

from .api_response import DebugOutput, LanguageInfo, ParseRequest, VisualizeRequest
from .syntax import SyntaxBlock, SyntaxElement, SyntaxToken
from .visualization import SourceSpan, VisualizationNode

__all__ = [
    # Visualization models
    "SourceSpan",
    "VisualizationNode",
    # Syntax tree models
    "SyntaxBlock",
    "SyntaxToken",
    "SyntaxElement",
    # API models
    "ParseRequest",
    "VisualizeRequest",
    "DebugOutput",
    "LanguageInfo",
]
