"""Document loader implementations."""
from .text_loader import TextLoader
from .composite_loader import CompositeLoader

__all__ = ["TextLoader", "CompositeLoader"]
