"""Baseline record fields and portable-text helpers."""

from typing import Any

from shared.models.document import Document


def standard_values(document: Document) -> dict[str, Any]:
    """Return the fields every index record carries, derived from the document's system fields."""
    return {
        "id": document.id,
        "type": document.type,
        "rev": document.rev,
    }


def flatten_blocks(blocks: list[dict] | None) -> str:
    """Flatten portable-text blocks into plain text.

    Only ``block`` entries contribute; the text of their spans is joined
    without separator and blocks are separated by a blank line. Images,
    embeds and other custom entries are skipped.

    Args:
        blocks (list[dict] | None): The portable-text array of a document field.

    Returns:
        str: The plain text, ``""`` for empty or missing input.
    """
    if not blocks:
        return ""
    paragraphs: list[str] = []
    for block in blocks:
        if not isinstance(block, dict) or block.get("_type") != "block":
            continue
        children = block.get("children") or []
        text = "".join(
            child.get("text", "")
            for child in children
            if isinstance(child, dict) and isinstance(child.get("text"), str)
        )
        paragraphs.append(text)
    return "\n\n".join(paragraphs)
