"""Document domain models."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

MIN_PRIORITY = 0.1
MAX_PRIORITY = 5.0


@dataclass
class StructuredBlock:
    """Fenced metadata block found in a document."""
    start_line: int
    end_line: int
    raw_content: str
    parsed: Any


@dataclass
class StructuredData:
    """Fields aggregated across all structured blocks of a document."""
    services: list[dict] = field(default_factory=list)
    products: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    alias_terms: list[str] = field(default_factory=list)
    search_keywords: list[str] = field(default_factory=list)
    use_cases: list[str] = field(default_factory=list)
    example_scenarios: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    manual_priority: Optional[float] = None


@dataclass
class Document:
    """Knowledge base document."""
    id: str
    filename: str
    title: str
    content: str
    category: str = "general"
    priority: float = 1.0
    size: int = 0
    word_count: int = 0
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    alias_terms: list[str] = field(default_factory=list)
    search_keywords: list[str] = field(default_factory=list)
    use_cases: list[str] = field(default_factory=list)
    example_scenarios: list[str] = field(default_factory=list)
    structured_blocks: list[StructuredBlock] = field(default_factory=list)
    structured_data: StructuredData = field(default_factory=StructuredData)
    tf_idf_vector: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.priority = max(MIN_PRIORITY, min(MAX_PRIORITY, float(self.priority)))

    @property
    def searchable_text(self) -> str:
        """Text indexed for candidate lookup."""
        return " ".join(
            [
                self.content,
                self.title,
                " ".join(self.alias_terms),
                " ".join(self.search_keywords),
            ]
        )


@dataclass(frozen=True)
class SearchOptions:
    """Query options. Unknown keys are ignored."""
    fuzzy_match: bool = True
    category_filter: Optional[str] = None
    priority_boost: bool = True

    _ALIASES = {
        "fuzzy_match": "fuzzy_match",
        "fuzzyMatch": "fuzzy_match",
        "category_filter": "category_filter",
        "categoryFilter": "category_filter",
        "priority_boost": "priority_boost",
        "priorityBoost": "priority_boost",
    }

    @classmethod
    def from_mapping(
        cls, options: Optional[Mapping[str, Any]], **defaults: Any
    ) -> "SearchOptions":
        """Build options from a loose mapping.

        Args:
            options: Caller-supplied options, snake_case or camelCase keys.
            **defaults: Values used for keys the caller did not set.

        Returns:
            Search options.
        """
        values = dict(defaults)
        for key, value in (options or {}).items():
            name = cls._ALIASES.get(key)
            if name is not None and value is not None:
                values[name] = value
        return cls(
            fuzzy_match=bool(values.get("fuzzy_match", True)),
            category_filter=values.get("category_filter") or None,
            priority_boost=bool(values.get("priority_boost", True)),
        )


@dataclass
class SearchResult:
    """Ranked search hit."""
    document: Document
    score: float
    matched_terms: list[str] = field(default_factory=list)
    snippets: list[str] = field(default_factory=list)

    @property
    def source(self) -> str:
        return self.document.id


@dataclass
class SearchResponse:
    """Search response for presentation layer."""
    results: list[SearchResult]
    context: str
    sources: list[str]
