"""Fenced YAML metadata blocks embedded in knowledge base documents."""

import logging
from numbers import Real
from typing import Any

import yaml

from ..models.document import StructuredBlock, StructuredData

logger = logging.getLogger(__name__)

FENCE_OPEN_MARKERS = ("```yaml", "```yml")
FENCE_CLOSE_MARKER = "```"

MIN_MANUAL_PRIORITY = 0.1
MAX_MANUAL_PRIORITY = 10.0

# block key -> StructuredData attribute
_LIST_FIELDS = {
    "alias_terms": "alias_terms",
    "search_keywords": "search_keywords",
    "use_cases": "use_cases",
    "example_scenarios": "example_scenarios",
    "products": "products",
    "features": "features",
}


def parse_structured_blocks(raw_text: str) -> list[StructuredBlock]:
    """Find and parse fenced YAML blocks.

    Blocks that fail to parse are logged and skipped. A block left open at
    the end of the text is dropped.

    Args:
        raw_text: Raw document text.

    Returns:
        Parsed blocks in document order.
    """
    blocks: list[StructuredBlock] = []
    lines = raw_text.split("\n")
    in_block = False
    block_start = -1
    current: list[str] = []

    for i, line in enumerate(lines):
        stripped = line.strip()

        if stripped in FENCE_OPEN_MARKERS:
            in_block = True
            block_start = i
            current = []
        elif stripped == FENCE_CLOSE_MARKER and in_block:
            in_block = False
            block_text = "\n".join(current)
            try:
                parsed = yaml.safe_load(block_text)
            except yaml.YAMLError as e:
                logger.warning(
                    f"Failed to parse YAML block at line {block_start}: {e}"
                )
                continue
            blocks.append(
                StructuredBlock(
                    start_line=block_start,
                    end_line=i,
                    raw_content=block_text,
                    parsed=parsed,
                )
            )
        elif in_block:
            current.append(line)

    return blocks


def count_fence_openings(raw_text: str) -> int:
    """Count fence-open markers by plain substring search."""
    return sum(raw_text.count(marker) for marker in FENCE_OPEN_MARKERS)


def extract_structured_data(blocks: list[StructuredBlock]) -> StructuredData:
    """Aggregate known fields across blocks.

    List fields are merged and de-duplicated in first-seen order. When several
    blocks declare ``priority`` the last one wins.

    Args:
        blocks: Parsed blocks of one document.

    Returns:
        Aggregated structured data.
    """
    data = StructuredData()

    for block in blocks:
        parsed = block.parsed
        if not isinstance(parsed, dict):
            continue

        for key, attr in _LIST_FIELDS.items():
            getattr(data, attr).extend(_string_items(parsed.get(key)))

        priority = parsed.get("priority")
        if isinstance(priority, Real) and not isinstance(priority, bool):
            data.manual_priority = max(
                MIN_MANUAL_PRIORITY, min(MAX_MANUAL_PRIORITY, float(priority))
            )

        if parsed.get("service_type"):
            data.services.append(
                {
                    "type": parsed["service_type"],
                    "category": parsed.get("category"),
                    "description": parsed.get("description"),
                    "features": parsed.get("features"),
                }
            )

        category = parsed.get("category")
        if category:
            data.categories.append(str(category))

    for attr in (*_LIST_FIELDS.values(), "categories"):
        setattr(data, attr, list(dict.fromkeys(getattr(data, attr))))

    unique_services = []
    for service in data.services:
        if service not in unique_services:
            unique_services.append(service)
    data.services = unique_services

    return data


def _string_items(value: Any) -> list[str]:
    """Scalar items of a list field, as strings."""
    if not isinstance(value, list):
        return []
    return [
        str(item)
        for item in value
        if item is not None and not isinstance(item, (dict, list))
    ]
