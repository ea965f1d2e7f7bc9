"""Document loader protocol for dependency injection."""
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class DocumentLoaderProtocol(Protocol):
    """Protocol for reading knowledge base files as text."""

    def supports(self, file_path: Path) -> bool:
        """Check whether the file type can be loaded.

        Args:
            file_path: Path to the file.

        Returns:
            True if the loader handles this file type.
        """
        ...

    def load(self, file_path: Path) -> Optional[str]:
        """Read file contents as text.

        Args:
            file_path: Path to the file.

        Returns:
            File text, or None if it could not be read.
        """
        ...
