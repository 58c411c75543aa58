from .document_store import Document, IDocumentStore, StoreRow

__all__ = [
    "Document",
    "IDocumentStore",
    "StoreRow",
]
