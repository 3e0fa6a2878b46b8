"""Errors raised while turning a syntax tree into visualization nodes."""


class TreeSerializationError(Exception):
    """Base class for failures of the tree walk."""


class MalformedTreeError(TreeSerializationError):
    """The source tree does not satisfy the walker's preconditions."""


class TreeTooLargeError(TreeSerializationError):
    """The walk exceeded its depth or node-count cap."""

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit
