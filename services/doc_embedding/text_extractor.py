"""Derive the text that gets embedded for a plan or journal entry."""

from shared.models.documents import SourceDocument

EMPTY_TEXT_PLACEHOLDER = "No content"


def extract_text(doc: SourceDocument) -> str:
    """Join the text-bearing fields of a document in priority order.

    Order: title or name, description, content or notes. Empty segments are
    skipped. Never returns an empty string, since hosted embedding APIs may
    reject empty input.

    Args:
        doc (SourceDocument): The plan or entry.

    Returns:
        str: The space-joined text, or "No content".
    """
    segments = [
        doc.title or doc.name or "",
        doc.description or "",
        doc.content or doc.notes or "",
    ]
    text = " ".join(segment for segment in segments if segment)
    return text if text.strip() else EMPTY_TEXT_PLACEHOLDER
