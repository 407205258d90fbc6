"""
Tests for the rule table and relevance ranker.
"""

from __future__ import annotations

import doctest
from unittest.mock import MagicMock

import pytest

from lexicon.domains.entries import Hypothetical, Phrase, Quote, Word

from . import ranker as ranker_module
from .extractors import primary_text
from .matchers import exact_match, substring_match
from .models import ScoredEntry
from .ranker import RelevanceRanker
from .rules import DEFAULT_RULES, Rule, RuleTable


@pytest.fixture
def ranker() -> RelevanceRanker:
    """Ranker with the default rule table."""
    return RelevanceRanker()


@pytest.fixture
def entries() -> list:
    """A small mixed lexicon."""
    return [
        Word(name="serendipity", definition="a fortunate discovery", tags=["luck"]),
        Word(name="luck", definition="serendipity's cousin"),
        Phrase(body="happy accident", definition="serendipity in practice", notes="common"),
        Quote(body="Chance favors the prepared mind", author="Pasteur", source="Lecture, 1854"),
        Hypothetical(body="What if every accident were lucky?", tags=["funny", "irony"]),
    ]


# --- RuleTable Tests ---


def test_default_rule_order() -> None:
    """Test the default table order encodes priority."""
    assert DEFAULT_RULES.names == [
        "primary-exact",
        "primary-prefix",
        "primary-word",
        "primary-substring",
        "definition-word",
        "tags-substring",
        "definition-substring",
        "notes-substring",
        "quote-source-substring",
    ]


def test_weights_decay_quadratically() -> None:
    """Test weight(i) = (N - i)^2."""
    n = len(DEFAULT_RULES)
    assert DEFAULT_RULES.weight(0) == n * n == 81
    assert DEFAULT_RULES.weight(n - 1) == 1
    weights = [DEFAULT_RULES.weight(i) for i in range(n)]
    assert weights == sorted(weights, reverse=True)
    assert DEFAULT_RULES.max_score == sum(weights) == 285


def test_top_weight_does_not_dominate_sum() -> None:
    """Quadratic decay is a property, not a dominance guarantee."""
    rest = sum(DEFAULT_RULES.weight(i) for i in range(1, len(DEFAULT_RULES)))
    assert DEFAULT_RULES.weight(0) < rest


def test_weight_out_of_range() -> None:
    with pytest.raises(IndexError):
        DEFAULT_RULES.weight(len(DEFAULT_RULES))
    with pytest.raises(IndexError):
        DEFAULT_RULES.weight(-1)


def test_rule_table_validation() -> None:
    """Test empty tables and duplicate names are rejected."""
    with pytest.raises(ValueError):
        RuleTable([])
    rule = Rule("dup", primary_text, exact_match)
    with pytest.raises(ValueError):
        RuleTable([rule, rule])


def test_rule_table_is_read_only() -> None:
    """Test rules cannot be reassigned."""
    with pytest.raises(TypeError):
        DEFAULT_RULES[0] = DEFAULT_RULES[1]  # type: ignore
    with pytest.raises(AttributeError):
        DEFAULT_RULES[0].name = "changed"  # type: ignore


def test_matcher_not_called_on_missing_field() -> None:
    """Test a None field value short-circuits the rule."""
    matcher = MagicMock(return_value=True)
    rule = Rule("missing", lambda entry: None, matcher)
    assert rule.matches(Word(name="x"), "x") is False
    matcher.assert_not_called()


def test_list_rule_matches_any_element() -> None:
    rule = Rule("tags", lambda entry: ["", "alpha", "beta"], substring_match)
    assert rule.matches(Word(name="x"), "bet")
    assert not rule.matches(Word(name="x"), "gamma")


# --- Scoring Tests ---


def test_empty_query_scores_zero(ranker: RelevanceRanker, entries: list) -> None:
    for entry in entries:
        assert ranker.score(entry, "") == 0
        assert ranker.score(entry, "   \t") == 0
        assert ranker.breakdown(entry, "  ") == []


def test_exact_primary_match_scores_all_primary_rules(ranker: RelevanceRanker) -> None:
    """Exact implies prefix, word and substring on the same field."""
    assert ranker.score(Word(name="luck"), "luck") == 81 + 64 + 49 + 36


def test_query_is_trimmed(ranker: RelevanceRanker) -> None:
    assert ranker.score(Word(name="luck"), "  luck ") == ranker.score(Word(name="luck"), "luck")


def test_exact_primary_beats_lone_substring_elsewhere(ranker: RelevanceRanker) -> None:
    """Test primary-exact outranks any entry whose only hit is a substring."""
    exact = Word(name="iron")
    elsewhere = [
        Hypothetical(body="what if", tags=["irony"]),
        Word(name="metal", definition="environment"),
        Phrase(body="p", notes="ironic"),
        Quote(body="q", source="Irongate"),
    ]
    exact_score = ranker.score(exact, "iron")
    assert exact_score >= DEFAULT_RULES.weight(0)
    for entry in elsewhere:
        assert 0 < ranker.score(entry, "iron") < exact_score


def test_tags_match_as_set(ranker: RelevanceRanker) -> None:
    """Test any tag substring-matching is enough."""
    entry = Hypothetical(body="What if the sky were green?", tags=["funny", "irony"])
    breakdown = ranker.breakdown(entry, "iron")
    matched = [m.rule for m in breakdown if m.matched]
    assert matched == ["tags-substring"]
    assert ranker.score(entry, "iron") == DEFAULT_RULES.weight(5)


def test_case_insensitive(ranker: RelevanceRanker, entries: list) -> None:
    for entry in entries:
        for query in ["serendipity", "Luck", "accident", "pasteur", "lecture", "iron"]:
            assert ranker.score(entry, query) == ranker.score(entry, query.upper())


def test_regex_metacharacters_match_literally(ranker: RelevanceRanker) -> None:
    """Test 'a.b' does not match 'axb' and special characters never raise."""
    assert ranker.score(Word(name="axb"), "a.b") == 0
    assert ranker.score(Word(name="a.b notation"), "a.b") == 64 + 49 + 36
    for query in ["(", "*", "a(b", "[", "c++", "?"]:
        ranker.score(Word(name="c++ (language)"), query)


def test_quote_source_only_ranked_for_quotes(ranker: RelevanceRanker) -> None:
    assert ranker.score(Quote(body="To be", source="Hamlet"), "hamlet") == 1
    assert ranker.score(Phrase(body="to be", source="Hamlet"), "hamlet") == 0


def test_notes_rank_lowest_tier(ranker: RelevanceRanker) -> None:
    assert ranker.score(Phrase(body="p", notes="heard at the pub"), "pub") == 4


def test_breakdown_sums_to_score(ranker: RelevanceRanker, entries: list) -> None:
    for entry in entries:
        for query in ["serendipity", "luck", "accident", "a"]:
            breakdown = ranker.breakdown(entry, query)
            assert len(breakdown) == len(DEFAULT_RULES)
            assert sum(m.score for m in breakdown) == ranker.score(entry, query)


# --- Ranking Tests ---


def test_rank_end_to_end(ranker: RelevanceRanker) -> None:
    """Exact name hit ranks ahead of a definition-only hit."""
    records = [
        Word(name="luck", definition="serendipity's cousin"),
        Word(name="serendipity", definition="a fortunate discovery"),
    ]
    ranked = ranker.rank(records, "serendipity")

    assert [r.entry.name for r in ranked] == ["serendipity", "luck"]
    assert ranked[0].score == 81 + 64 + 49 + 36
    # definition-word + definition-substring
    assert ranked[1].score == 25 + 9
    assert ranked[0].score > ranked[1].score


def test_rank_is_sorted_descending(ranker: RelevanceRanker, entries: list) -> None:
    ranked = ranker.rank(entries, "serendipity")
    scores = [r.score for r in ranked]
    assert scores == sorted(scores, reverse=True)
    assert all(isinstance(r, ScoredEntry) for r in ranked)
    assert len(ranked) == len(entries)


def test_rank_is_stable_for_ties(ranker: RelevanceRanker) -> None:
    """Test equal scores keep input order."""
    tied = [Phrase(body=f"phrase {i}", notes="shared note") for i in range(6)]
    top = Word(name="note")
    ranked = ranker.rank([*tied[:3], top, *tied[3:]], "note")

    assert ranked[0].entry == top
    assert [r.entry for r in ranked[1:]] == tied
    assert len({r.score for r in ranked[1:]}) == 1


def test_rank_zero_scores_keep_input_order(ranker: RelevanceRanker, entries: list) -> None:
    ranked = ranker.rank(entries, "zzz-no-match")
    assert [r.entry for r in ranked] == entries
    assert all(r.score == 0 for r in ranked)


def test_rank_is_deterministic(ranker: RelevanceRanker, entries: list) -> None:
    first = ranker.rank(entries, "accident")
    second = ranker.rank(entries, "accident")
    assert [(r.entry, r.score) for r in first] == [(r.entry, r.score) for r in second]


def test_rank_does_not_mutate_input(ranker: RelevanceRanker, entries: list) -> None:
    snapshot = list(entries)
    ranker.rank(entries, "luck")
    assert entries == snapshot


def test_rank_with_explain(ranker: RelevanceRanker, entries: list) -> None:
    ranked = ranker.rank(entries, "serendipity", explain=True)
    plain = ranker.rank(entries, "serendipity")

    assert [r.score for r in ranked] == [r.score for r in plain]
    assert all(r.breakdown is not None for r in ranked)
    assert "primary-exact" in ranked[0].to_result()["matched_rules"]


def test_rank_empty_candidates(ranker: RelevanceRanker) -> None:
    assert ranker.rank([], "anything") == []


def test_custom_rule_table() -> None:
    """Test the ranker honors an injected table."""
    table = RuleTable(
        [
            Rule("primary-substring", primary_text, substring_match),
            Rule("primary-exact", primary_text, exact_match),
        ]
    )
    custom = RelevanceRanker(table)
    assert custom.max_score == 4 + 1
    assert custom.score(Word(name="luck"), "luck") == 5
    assert custom.score(Word(name="lucky"), "luck") == 4


def test_class_example_runs() -> None:
    results = doctest.testmod(ranker_module)
    assert results.attempted > 0
    assert results.failed == 0
