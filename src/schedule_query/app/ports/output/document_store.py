from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

Document = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class StoreRow:
    key: str
    doc: Document | None = None


class IDocumentStore(ABC):
    """Read-only port over a key-ordered document collection."""

    @abstractmethod
    async def get_by_key(self, key: str) -> Document:
        """Return the document stored under `key`; raise NotFound if absent."""

    @abstractmethod
    async def get_range(
        self,
        start_key: str,
        end_key: str,
        *,
        include_docs: bool = False,
        fields: Sequence[str] | None = None,
    ) -> list[StoreRow]:
        """Rows with start_key <= key <= end_key, ordered by key.

        `fields` limits returned documents to the named fields.
        """

    @abstractmethod
    async def list_all(
        self, *, include_docs: bool = False, fields: Sequence[str] | None = None
    ) -> list[StoreRow]:
        """Every row in key order."""
