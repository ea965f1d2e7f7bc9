"""Ingest service - knowledge base loading and indexing."""

import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..analysis.categorizer import build_document
from ..models.document import Document
from ..protocols.document_loader import DocumentLoaderProtocol
from ..protocols.search_index import SearchIndexProtocol

logger = logging.getLogger(__name__)


class IngestService:
    """Service for loading knowledge base files into the search index."""

    def __init__(
        self,
        search_index: SearchIndexProtocol,
        loader: Optional[DocumentLoaderProtocol] = None,
        docs_path: str = "./knowledge-base",
    ):
        """Initialize ingest service.

        Args:
            search_index: Index rebuilt on each run.
            loader: File loader; defaults to the composite loader.
            docs_path: Path to knowledge base folder.
        """
        self._search_index = search_index
        self._docs_path = Path(docs_path)
        self._loader = loader

    @property
    def loader(self) -> DocumentLoaderProtocol:
        """Lazy load document loader."""
        if self._loader is None:
            from kb_search.infrastructure.document_loaders import CompositeLoader

            self._loader = CompositeLoader()
        return self._loader

    def load_documents(self) -> list[Document]:
        """Read and analyze every supported file in the knowledge base.

        Returns:
            Documents sorted by filename.
        """
        if not self._docs_path.exists():
            logger.error(f"Docs path not found: {self._docs_path}")
            return []
        if not self._docs_path.is_dir():
            logger.error(f"Docs path is not a directory: {self._docs_path}")
            return []

        documents = []
        for file_path in sorted(self._docs_path.iterdir()):
            if file_path.name.startswith(".") or not file_path.is_file():
                continue
            if not self.loader.supports(file_path):
                logger.debug(f"Skip unsupported: {file_path.name}")
                continue

            content = self.loader.load(file_path)
            if content is None:
                continue

            stats = file_path.stat()
            documents.append(
                build_document(
                    filename=file_path.name,
                    content=content,
                    size=stats.st_size,
                    created_at=_timestamp(getattr(stats, "st_birthtime", stats.st_ctime)),
                    modified_at=_timestamp(stats.st_mtime),
                )
            )

        return documents

    def run(self) -> int:
        """Reload the knowledge base and rebuild the index.

        Returns:
            Number of documents indexed.
        """
        documents = self.load_documents()
        self._search_index.build_index(documents)
        logger.info(f"Knowledge base loaded: {len(documents)} documents")
        return len(documents)

    def list_documents(
        self,
        category: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Document]:
        """Indexed documents, optionally restricted to one category.

        Args:
            category: Exact category to keep.
            offset: Number of matching documents to skip.
            limit: Maximum number of documents; None for all.

        Returns:
            One page of documents in index order.
        """
        documents = list(self._search_index.documents)
        if category:
            documents = [d for d in documents if d.category == category]
        start = max(offset, 0)
        if limit is None:
            return documents[start:]
        return documents[start : start + max(limit, 0)]

    def get_document(self, doc_id: str) -> Optional[Document]:
        for doc in self._search_index.documents:
            if doc.id == doc_id:
                return doc
        return None

    def categories(self) -> dict[str, int]:
        """Document count per category."""
        return dict(Counter(d.category for d in self._search_index.documents))


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)
