"""
Line-ending normalization for rendered node text.
"""

import re

CRLF = "\r\n"
LF = "\n"
LF_MARKER = "LF"


def normalize(text: str) -> str:
    """
    Collapse line endings into a visible, platform-independent marker.

    ``"\\r\\n"`` is first folded into ``"\\n"`` and every ``"\\n"`` is then
    replaced by the literal ``"LF"``. A lone ``"\\r"`` is left untouched.

    Args:
        text: Rendered text of a syntax node

    Returns:
        Normalized text
    """
    return text.replace(CRLF, LF).replace(LF, LF_MARKER)


_BARE_LF = re.compile(r"(?<!\r)\n")


def to_crlf(text: str) -> str:
    """
    Convert every ``"\\n"`` not already preceded by ``"\\r"`` into ``"\\r\\n"``.

    Applied to source text before parsing when a caller asks for uniform
    line endings. Unrelated to :func:`normalize`, which is applied to output.
    """
    return _BARE_LF.sub(CRLF, text)
