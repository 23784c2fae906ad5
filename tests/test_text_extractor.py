"""Tests for the document text extractor."""

import pytest

from services.doc_embedding.text_extractor import extract_text
from shared.models.documents import SourceDocument


def test_joins_fields_in_priority_order():
    doc = SourceDocument(id="p1", title="Week 1", description="Base building", content="Easy runs")
    assert extract_text(doc) == "Week 1 Base building Easy runs"


def test_name_and_notes_are_fallbacks():
    doc = SourceDocument(id="e1", name="Leg day", notes="Squats 5x5")
    assert extract_text(doc) == "Leg day Squats 5x5"


def test_title_wins_over_name_and_content_over_notes():
    doc = SourceDocument(id="e1", title="T", name="N", content="C", notes="X")
    assert extract_text(doc) == "T C"


def test_skips_empty_segments_without_extra_spaces():
    doc = SourceDocument(id="e1", title="", description=None, content="Ran 5k")
    assert extract_text(doc) == "Ran 5k"


@pytest.mark.parametrize(
    "fields",
    [
        {},
        {"title": "", "content": ""},
        {"title": "   "},
        {"plan_text": "only plan text", "timestamp": "2024-01-01"},
    ],
)
def test_documents_without_text_get_placeholder(fields):
    doc = SourceDocument(id="x", **fields)
    assert extract_text(doc) == "No content"
