"""Text analysis: terms, structured blocks, categorization."""
from .terms import STOP_WORDS, extract_terms
from .structured_blocks import extract_structured_data, parse_structured_blocks
from .categorizer import (
    build_document,
    calculate_priority,
    derive_title,
    determine_category,
)

__all__ = [
    "STOP_WORDS",
    "extract_terms",
    "extract_structured_data",
    "parse_structured_blocks",
    "build_document",
    "calculate_priority",
    "derive_title",
    "determine_category",
]
