from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from schedule_query.app.ports.output import Document, IDocumentStore, StoreRow
from schedule_query.domain.exceptions import NotFound


def _project(doc: Document, fields: Sequence[str] | None) -> Document:
    if fields is None:
        return dict(doc)
    return {f: doc[f] for f in fields if f in doc}


@dataclass(slots=True)
class InMemoryDocumentStore(IDocumentStore):
    """Key-ordered store backed by a dict and a sorted key list.

    Enumeration order is always ascending key order, which makes it the
    deterministic store used by tests and by the GTFS directory loader.
    """

    name: str = "documents"
    _docs: dict[str, dict[str, Any]] = field(default_factory=dict, init=False, repr=False)
    _keys: list[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_items(
        cls, items: Iterable[tuple[str, Mapping[str, Any]]], *, name: str = "documents"
    ) -> "InMemoryDocumentStore":
        store = cls(name=name)
        store.put_many(items)
        return store

    def put_many(self, items: Iterable[tuple[str, Mapping[str, Any]]]) -> None:
        for key, doc in items:
            self._docs[key] = dict(doc)
        self._keys = sorted(self._docs)

    def __len__(self) -> int:
        return len(self._keys)

    def _rows(
        self, keys: Iterable[str], include_docs: bool, fields: Sequence[str] | None
    ) -> list[StoreRow]:
        if not include_docs:
            return [StoreRow(key=k) for k in keys]
        return [StoreRow(key=k, doc=_project(self._docs[k], fields)) for k in keys]

    async def get_by_key(self, key: str) -> Document:
        doc = self._docs.get(key)
        if doc is None:
            raise NotFound(f"{self.name}: missing document {key!r}")
        return dict(doc)

    async def get_range(
        self,
        start_key: str,
        end_key: str,
        *,
        include_docs: bool = False,
        fields: Sequence[str] | None = None,
    ) -> list[StoreRow]:
        lo = bisect_left(self._keys, start_key)
        hi = bisect_right(self._keys, end_key)
        return self._rows(self._keys[lo:hi], include_docs, fields)

    async def list_all(
        self, *, include_docs: bool = False, fields: Sequence[str] | None = None
    ) -> list[StoreRow]:
        return self._rows(list(self._keys), include_docs, fields)
