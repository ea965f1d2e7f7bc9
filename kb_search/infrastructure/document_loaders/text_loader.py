from pathlib import Path


class TextLoader:
    """Plain text and Markdown files."""

    EXTENSIONS = {".txt", ".md"}

    def __init__(self, encoding: str = "utf-8-sig"):
        self._encoding = encoding

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def load(self, file_path: Path) -> str:
        text = file_path.read_text(encoding=self._encoding)
        return text.replace("\r\n", "\n")
