"""Document categorization, priority and assembly."""

from datetime import datetime
from pathlib import PurePath
from typing import Optional

from ..models.document import MAX_PRIORITY, MIN_PRIORITY, Document, StructuredData
from .structured_blocks import (
    count_fence_openings,
    extract_structured_data,
    parse_structured_blocks,
)

DEFAULT_CATEGORY = "general"

# Order matters: first matching category wins.
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "asset_management": ["asset management", "investment", "portfolio", "wealth management"],
    "payment_transactions": ["payment", "transfer", "transaction", "invoice", "bill"],
    "cybersecurity": ["security", "cyber", "threat", "protection", "fraud"],
    "banking": ["banking", "account", "card", "loan", "mortgage"],
    "investment": ["investment", "trading", "stocks", "bonds", "funds"],
    "wealth_management": ["wealth", "private", "advisory", "planning"],
}

BASE_PRIORITY = 1.0


def determine_category(
    filename: str, content: str, structured_data: StructuredData
) -> str:
    """Pick a category label for a document.

    A category declared in a structured block wins. Otherwise the first
    keyword table entry matching the filename or content is used.
    """
    if structured_data.categories:
        return structured_data.categories[0]

    filename_lower = filename.lower()
    content_lower = content.lower()

    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(k in filename_lower or k in content_lower for k in keywords):
            return category

    return DEFAULT_CATEGORY


def calculate_priority(structured_data: StructuredData, content: str) -> float:
    """Compute ranking priority in [0.1, 5].

    Args:
        structured_data: Aggregated structured data.
        content: Raw document text.

    Returns:
        Manual priority if declared, else a score from metadata richness,
        length and structured block density.
    """
    if structured_data.manual_priority is not None:
        return max(MIN_PRIORITY, min(MAX_PRIORITY, structured_data.manual_priority))

    priority = BASE_PRIORITY

    if structured_data.alias_terms:
        priority += 0.5
    if structured_data.search_keywords:
        priority += 0.5
    if structured_data.use_cases:
        priority += 0.3
    if structured_data.example_scenarios:
        priority += 0.3

    word_count = count_words(content)
    if word_count > 1000:
        priority += 0.5
    if word_count > 2000:
        priority += 0.5

    priority += count_fence_openings(content) * 0.2

    return min(priority, MAX_PRIORITY)


def derive_title(filename: str, content: str) -> str:
    """Level-1 heading on the first non-empty line, else the filename stem."""
    for line in content.split("\n"):
        line = line.strip()
        if not line:
            continue
        if line.startswith("# ") and line[2:].strip():
            return line[2:].strip()
        break
    return PurePath(filename).stem


def count_words(content: str) -> int:
    return len(content.split())


def build_document(
    filename: str,
    content: str,
    size: Optional[int] = None,
    created_at: Optional[datetime] = None,
    modified_at: Optional[datetime] = None,
) -> Document:
    """Assemble a document from raw text.

    Args:
        filename: File name, used as the document id.
        content: Raw document text.
        size: Byte size; defaults to the UTF-8 length of the content.
        created_at: Creation timestamp from the loader.
        modified_at: Modification timestamp from the loader.

    Returns:
        Document ready for indexing.
    """
    blocks = parse_structured_blocks(content)
    structured_data = extract_structured_data(blocks)

    return Document(
        id=filename,
        filename=filename,
        title=derive_title(filename, content),
        content=content,
        category=determine_category(filename, content, structured_data),
        priority=calculate_priority(structured_data, content),
        size=size if size is not None else len(content.encode("utf-8")),
        word_count=count_words(content),
        created_at=created_at,
        modified_at=modified_at,
        alias_terms=list(structured_data.alias_terms),
        search_keywords=list(structured_data.search_keywords),
        use_cases=list(structured_data.use_cases),
        example_scenarios=list(structured_data.example_scenarios),
        structured_blocks=blocks,
        structured_data=structured_data,
    )
