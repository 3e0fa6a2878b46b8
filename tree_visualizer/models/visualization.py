"""Visualization node data models."""

import json
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class SourceSpan(BaseModel):
    """Half-open range ``[start, start + length)`` into the original source."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    length: int = Field(ge=0)

    @property
    def end(self) -> int:
        return self.start + self.length


class VisualizationNode(BaseModel):
    """
    Serializable copy of one syntax tree node.

    Field aliases give the wire shape consumed by the tree view:
    ``{"Content", "Start", "Length", "Children"}`` in that order.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(alias="Content")
    start: int = Field(alias="Start", ge=0)
    length: int = Field(alias="Length", ge=0)
    children: List['VisualizationNode'] = Field(default_factory=list, alias="Children")

    @property
    def span(self) -> SourceSpan:
        return SourceSpan(start=self.start, length=self.length)

    def count_nodes(self) -> int:
        """Return the number of nodes in this subtree, this node included."""
        total = 0
        pending = [self]
        while pending:
            node = pending.pop()
            total += 1
            pending.extend(node.children)
        return total

    def to_json(self) -> str:
        """
        Render the subtree as compact JSON using the wire field names.

        Built with an explicit stack rather than ``model_dump_json``, whose
        recursion stops a few hundred levels down, so any tree the walker
        can build can also be rendered.

        Returns:
            JSON document with ``Content``, ``Start``, ``Length`` and ``Children`` fields
        """
        parts: List[str] = []
        # Nodes still to render, interleaved with the literal JSON that follows them
        pending: List[Union['VisualizationNode', str]] = [self]

        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
                continue

            parts.append(
                f'{{"Content":{json.dumps(item.content, ensure_ascii=False)},'
                f'"Start":{item.start},"Length":{item.length},"Children":['
            )
            pending.append("]}")
            for index in range(len(item.children) - 1, -1, -1):
                pending.append(item.children[index])
                if index:
                    pending.append(",")

        return "".join(parts)


# Enable forward references for recursive model
VisualizationNode.model_rebuild()
