"""
Tests for field extractors.
"""

from __future__ import annotations

from lexicon.domains.entries import Hypothetical, Phrase, Quote, Word

from .extractors import definition_text, notes_text, primary_text, quote_source, tag_values


def test_primary_text_per_kind() -> None:
    """Test primary text is the name for words and the body otherwise."""
    assert primary_text(Word(name="luck")) == "luck"
    assert primary_text(Phrase(body="break a leg")) == "break a leg"
    assert primary_text(Quote(body="To be or not to be", name="Hamlet")) == "To be or not to be"
    assert primary_text(Hypothetical(body="What if the sun went out?")) == "What if the sun went out?"


def test_primary_text_tolerates_missing_attribute() -> None:
    """Test an entry built without validation does not raise."""
    word = Word.model_construct(tags=[])
    assert primary_text(word) is None


def test_definition_only_for_words_and_phrases() -> None:
    assert definition_text(Word(name="luck", definition="chance")) == "chance"
    assert definition_text(Phrase(body="break a leg", definition="good luck")) == "good luck"
    assert definition_text(Quote(body="q")) is None
    assert definition_text(Hypothetical(body="h")) is None


def test_definition_absent() -> None:
    assert definition_text(Word(name="luck")) is None


def test_tag_values() -> None:
    assert tag_values(Hypothetical(body="h", tags=["funny", "irony"])) == ["funny", "irony"]
    assert tag_values(Word(name="w")) == []


def test_notes_for_every_kind() -> None:
    assert notes_text(Word(name="w", notes="n1")) == "n1"
    assert notes_text(Phrase(body="p", notes="n2")) == "n2"
    assert notes_text(Quote(body="q", notes="n3")) == "n3"
    assert notes_text(Hypothetical(body="h")) is None


def test_quote_source_only_for_quotes() -> None:
    assert quote_source(Quote(body="q", source="Hamlet")) == "Hamlet"
    assert quote_source(Phrase(body="p", source="folk")) is None
    assert quote_source(Hypothetical(body="h", source="dream")) is None
