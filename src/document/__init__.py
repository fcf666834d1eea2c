"""Document access: text snapshots and read-only stores."""

from document.store import FileDocumentStore, InMemoryDocumentStore
from document.text_document import TextDocument

__all__ = ["FileDocumentStore", "InMemoryDocumentStore", "TextDocument"]
