from .in_memory_document_store import InMemoryDocumentStore
from .local_gtfs_loader import GtfsDocumentStores, LocalGtfsLoader

__all__ = [
    "GtfsDocumentStores",
    "InMemoryDocumentStore",
    "LocalGtfsLoader",
]
