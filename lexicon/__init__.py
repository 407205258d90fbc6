"""
Lexicon - Relevance-ranked search over a personal lexicon.

Example:
    >>> from lexicon.domains.entries import Word
    >>> from lexicon.domains.search import RelevanceRanker
    >>> ranked = RelevanceRanker().rank([Word(name="serendipity")], "serendipity")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
