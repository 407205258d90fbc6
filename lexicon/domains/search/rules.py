"""
Rule Table - Ordered (extractor, matcher) pairs that define relevance.

Earlier rules carry more weight. A rule at 0-based position ``i`` in a table
of ``N`` rules contributes ``(N - i) ** 2`` when it matches; quadratic decay
widens the gap between the top tiers and narrows it toward the bottom. The top
rule alone does not outweigh every lower rule combined.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from lexicon.domains.entries import Entry

from .contracts import FieldExtractor, Matcher
from .extractors import definition_text, notes_text, primary_text, quote_source, tag_values
from .matchers import exact_match, prefix_match, substring_match, word_match

__all__ = ["Rule", "RuleTable", "DEFAULT_RULES"]


@dataclass(frozen=True)
class Rule:
    """One field at one matching strictness."""

    name: str
    extractor: FieldExtractor
    matcher: Matcher

    def matches(self, entry: Entry, query: str) -> bool:
        """
        Apply the matcher to the extracted value.

        A missing value never matches. For list values (tags) any single
        non-empty element is enough.
        """
        value = self.extractor(entry)
        if value is None:
            return False
        if isinstance(value, str):
            return self.matcher(value, query)
        return any(self.matcher(item, query) for item in value if item)


class RuleTable:
    """
    Immutable, ordered rule sequence.

    Example:
        >>> table = RuleTable([Rule("primary-exact", primary_text, exact_match)])
        >>> table.weight(0)
        1
    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        if not self._rules:
            raise ValueError("Rule table needs at least one rule")

        names = [rule.name for rule in self._rules]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate rule names: {names}")

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    @property
    def names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def weight(self, index: int) -> int:
        """Weight of the rule at ``index``: ``(N - index) ** 2``."""
        if not 0 <= index < len(self._rules):
            raise IndexError(f"Rule index out of range: {index}")
        return (len(self._rules) - index) ** 2

    @property
    def max_score(self) -> int:
        """Score of an entry matching every rule."""
        return sum(self.weight(i) for i in range(len(self._rules)))


DEFAULT_RULES = RuleTable(
    (
        # Tier 1: primary text, strict to loose
        Rule("primary-exact", primary_text, exact_match),
        Rule("primary-prefix", primary_text, prefix_match),
        Rule("primary-word", primary_text, word_match),
        Rule("primary-substring", primary_text, substring_match),
        # Tier 2: definition and tags
        Rule("definition-word", definition_text, word_match),
        Rule("tags-substring", tag_values, substring_match),
        Rule("definition-substring", definition_text, substring_match),
        # Tier 3: notes and quote source
        Rule("notes-substring", notes_text, substring_match),
        Rule("quote-source-substring", quote_source, substring_match),
    )
)
