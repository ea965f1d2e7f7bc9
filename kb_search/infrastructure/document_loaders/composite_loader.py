import logging
from pathlib import Path
from typing import Optional

from kb_search.core.protocols.document_loader import DocumentLoaderProtocol

from .text_loader import TextLoader

logger = logging.getLogger(__name__)


class CompositeLoader:
    """Dispatches each file to the first loader that supports it."""

    def __init__(self, loaders: Optional[list[DocumentLoaderProtocol]] = None):
        self._loaders = loaders or [TextLoader()]

    def supports(self, file_path: Path) -> bool:
        if file_path.name.startswith("."):
            return False
        return any(loader.supports(file_path) for loader in self._loaders)

    def load(self, file_path: Path) -> Optional[str]:
        for loader in self._loaders:
            if loader.supports(file_path):
                try:
                    return loader.load(file_path)
                except (OSError, UnicodeDecodeError) as e:
                    logger.error(f"Failed to load {file_path}: {e}")
                    return None
        return None
