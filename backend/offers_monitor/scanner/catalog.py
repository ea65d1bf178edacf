"""Read-only views over the ordered app catalog."""

from typing import List, Protocol, Sequence

from offers_monitor.scanner.types import CatalogEntry


class CatalogSource(Protocol):
    """Ordered, stable sequence of catalog entries.

    Implementations raise CatalogUnavailableError when the backing store
    cannot be read.
    """

    async def length(self) -> int:
        ...

    async def slice(self, offset: int, count: int) -> List[CatalogEntry]:
        ...


class InMemoryCatalog:
    """Catalog held in a Python sequence, in the order given."""

    def __init__(self, entries: Sequence[CatalogEntry]):
        self._entries = tuple(entries)

    async def length(self) -> int:
        return len(self._entries)

    async def slice(self, offset: int, count: int) -> List[CatalogEntry]:
        return list(self._entries[offset:offset + count])
