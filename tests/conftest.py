"""Shared fixtures for knowledge base search tests."""

import pytest

from kb_search.core.index.search_index import SearchIndex
from kb_search.core.models.document import Document


@pytest.fixture
def banking_doc():
    return Document(
        id="ubs_banking.md",
        filename="ubs_banking.md",
        title="UBS Banking Services",
        content=(
            "UBS offers a savings account for everyday clients. "
            "Open a savings account online in minutes. "
            "Every savings account earns interest monthly."
        ),
        category="banking",
        priority=1.5,
    )


@pytest.fixture
def investment_doc():
    return Document(
        id="investment.md",
        filename="investment.md",
        title="Investment Strategies",
        content=(
            "Investment planning starts with clear goals. "
            "A diversified investment mix lowers risk. "
            "Long term investment rewards patience. "
            "Review each investment yearly. "
            "Good investment habits compound over time."
        ),
        category="investment",
        priority=1.0,
    )


@pytest.fixture
def corpus(banking_doc, investment_doc):
    return [banking_doc, investment_doc]


@pytest.fixture
def index(corpus):
    search_index = SearchIndex()
    search_index.build_index(corpus)
    return search_index


@pytest.fixture
def kb_dir(tmp_path):
    (tmp_path / "cards.md").write_text(
        "# Card Services\n"
        "\n"
        "```yaml\n"
        "category: banking\n"
        "alias_terms:\n"
        "  - debit card\n"
        "search_keywords:\n"
        "  - card replacement\n"
        "use_cases:\n"
        "  - lost card\n"
        "```\n"
        "\n"
        "Order a new card online. Replacement cards arrive within five days.\n",
        encoding="utf-8",
    )
    (tmp_path / "notes.txt").write_text(
        "Fraud protection tips for online security. Never share your PIN code.\n",
        encoding="utf-8",
    )
    (tmp_path / ".hidden.md").write_text("# Hidden\n", encoding="utf-8")
    (tmp_path / "logo.png").write_bytes(b"\x89PNG")
    return tmp_path
