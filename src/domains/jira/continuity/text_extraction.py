"""
Plain-text extraction from Jira comment bodies.

Jira Cloud returns comment bodies in Atlassian Document Format (ADF): a tree of
blocks whose ``content`` lists hold inline items carrying a ``text`` field.
Older instances (and hand-written exports) return plain strings. Extraction is
shallow: each top-level block contributes the ``text`` of its
direct items, which is enough for the lexical question heuristics.
"""

from collections.abc import Mapping
from typing import Any


def _has_content(node: Any) -> bool:
    return isinstance(node, Mapping) and isinstance(node.get("content"), list)


def _has_text(node: Any) -> bool:
    return isinstance(node, Mapping) and node.get("text") is not None


def stringify_text_value(value: Any) -> str:
    """
    Render an ADF ``text`` value the way Jira clients display it.

    Booleans become ``"true"``/``"false"`` and integral floats drop the
    fractional part, so ``0``, ``False`` and ``1.0`` are never lost or
    rendered Python-style.

    Args:
        value (Any): Raw value of an item's ``text`` field.

    Returns:
        str: String form of the value, or ``""`` for ``None``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def extract_item_text(item: Any) -> str:
    return stringify_text_value(item.get("text")) if _has_text(item) else ""


def process_adf_block(block: Any) -> str:
    """Joins the text of a block's direct items with single spaces (no trimming)."""
    if not _has_content(block):
        return ""
    return " ".join(extract_item_text(item) for item in block["content"])


def extract_text(body: Any) -> str:
    """
    Flattens a comment body into plain text.

    Args:
        body (Any): Plain string, ADF document (``{"content": [...]}``) or anything else.

    Returns:
        str: The extracted text; ``""`` for missing or unrecognized bodies.
    """
    if isinstance(body, str):
        return body
    if not _has_content(body):
        return ""
    return " ".join(process_adf_block(block) for block in body["content"]).strip()
