"""Scoring strategies."""
from .scoring import RelevanceScorer, RelevanceWeights, SnippetExtractor, matched_terms

__all__ = [
    "RelevanceScorer",
    "RelevanceWeights",
    "SnippetExtractor",
    "matched_terms",
]
