"""
Parse and visualization REST API endpoints.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from plugins import LanguagePlugin, ParsedSource, ParseError, PluginManager, create_default_plugin_manager
from tree_visualizer.config import settings
from tree_visualizer.models import (
    DebugOutput,
    LanguageInfo,
    ParseRequest,
    VisualizationNode,
    VisualizeRequest,
)
from tree_visualizer.serializer import (
    MalformedTreeError,
    SyntaxTreeAdapter,
    TreeAdapter,
    TreeSerializer,
    TreeTooLargeError,
    format_tree,
    to_crlf,
)
from tree_visualizer.utils.logging import get_logger, log_error_with_context, log_parse_request

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["parse"])

_plugin_manager: Optional[PluginManager] = None


def get_plugin_manager() -> PluginManager:
    """Return the process-wide plugin manager, creating it on first use."""
    global _plugin_manager
    if _plugin_manager is None:
        _plugin_manager = create_default_plugin_manager()
    return _plugin_manager


def _tree_serializer(adapter: TreeAdapter) -> TreeSerializer:
    return TreeSerializer(
        adapter,
        max_depth=settings.max_tree_depth,
        max_nodes=settings.max_tree_nodes,
    )


def _json_response(node: VisualizationNode) -> Response:
    return Response(content=node.to_json(), media_type="application/json")


def _resolve_plugin(manager: PluginManager, language: Optional[str]) -> LanguagePlugin:
    language = language or settings.default_language
    plugin = manager.get_plugin(language)
    if plugin is None:
        logger.warning(f"Unsupported language requested: {language}")
        raise HTTPException(status_code=404, detail=f"Language '{language}' is not supported")
    return plugin


async def _parse_source(request: ParseRequest, manager: PluginManager) -> ParsedSource:
    if len(request.content) > settings.max_source_length:
        raise HTTPException(
            status_code=413,
            detail=f"Source exceeds {settings.max_source_length} characters",
        )

    plugin = _resolve_plugin(manager, request.language)
    content = to_crlf(request.content) if request.normalize_newlines else request.content

    try:
        return await plugin.parse(content)
    except ParseError as e:
        logger.warning(f"Parse failed: {e}", extra={"language": plugin.language_name})
        raise HTTPException(status_code=422, detail=str(e))


@contextmanager
def _tree_errors() -> Iterator[None]:
    """Translate tree walk failures into HTTP errors."""
    try:
        yield
    except TreeTooLargeError as e:
        logger.warning(f"Tree walk aborted: {e}")
        raise HTTPException(status_code=413, detail=str(e))
    except MalformedTreeError as e:
        logger.warning(f"Malformed syntax tree: {e}")
        raise HTTPException(status_code=422, detail=str(e))


def _visualize(root, adapter: TreeAdapter) -> VisualizationNode:
    with _tree_errors():
        return _tree_serializer(adapter).visit(root)


def _format_debug(root, adapter: TreeAdapter) -> str:
    with _tree_errors():
        return format_tree(
            root,
            adapter,
            max_depth=settings.max_tree_depth,
            max_nodes=settings.max_tree_nodes,
        )


@router.get("/languages", response_model=List[LanguageInfo])
async def list_languages(manager: PluginManager = Depends(get_plugin_manager)) -> List[LanguageInfo]:
    """
    List languages that can be parsed.

    Returns:
        Supported languages with their file extensions
    """
    return [
        LanguageInfo(name=name, file_extensions=manager.get_plugin(name).file_extensions)
        for name in manager.list_supported_languages()
    ]


@router.post("/parse")
async def parse_source(
    request: ParseRequest,
    manager: PluginManager = Depends(get_plugin_manager),
) -> Response:
    """
    Parse source text and return its visualization tree.

    Args:
        request: Source text, language and input options

    Returns:
        Visualization node JSON (Content, Start, Length, Children)

    Raises:
        HTTPException: If the language is unknown, the input is too large,
            or the source cannot be parsed
    """
    try:
        parsed = await _parse_source(request, manager)
        node = _visualize(parsed.root, parsed.adapter)
        log_parse_request(
            logger,
            language=parsed.language,
            source_length=len(parsed.content),
            node_count=node.count_nodes(),
        )
        return _json_response(node)

    except HTTPException:
        raise
    except Exception as e:
        log_error_with_context(logger, "Error visualizing source", e, language=request.language)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/parse/debug", response_model=DebugOutput, response_model_by_alias=True)
async def parse_source_debug(
    request: ParseRequest,
    manager: PluginManager = Depends(get_plugin_manager),
) -> DebugOutput:
    """
    Parse source text and return an indented debug rendering of its tree.

    Args:
        request: Source text, language and input options

    Returns:
        Debug listing with one line per syntax node
    """
    try:
        parsed = await _parse_source(request, manager)
        output = _format_debug(parsed.root, parsed.adapter)
        log_parse_request(logger, language=parsed.language, source_length=len(parsed.content))
        return DebugOutput(output=output)

    except HTTPException:
        raise
    except Exception as e:
        log_error_with_context(logger, "Error formatting source tree", e, language=request.language)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/visualize")
async def visualize_tree(request: VisualizeRequest) -> Response:
    """
    Convert a caller-supplied syntax tree into its visualization tree.

    Args:
        request: Syntax tree made of blocks and tokens

    Returns:
        Visualization node JSON (Content, Start, Length, Children)
    """
    try:
        node = _visualize(request.root, SyntaxTreeAdapter())
        logger.info("Visualized syntax tree", extra={"node_count": node.count_nodes()})
        return _json_response(node)

    except HTTPException:
        raise
    except Exception as e:
        log_error_with_context(logger, "Error visualizing syntax tree", e)
        raise HTTPException(status_code=500, detail="Internal server error")
