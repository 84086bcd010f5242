"""TypeIndexMap — immutable mapping from document type to its destination index client."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from shared.clients.index.IndexClientInterface import IndexClientInterface


class TypeIndexMap(Mapping):
    """Read-only ``type name -> index client`` table, built once at startup.

    Its keys are the complete set of document types the bridge is responsible
    for; the store query is restricted to them.
    """

    def __init__(self, mapping: Mapping[str, IndexClientInterface]):
        if not mapping:
            raise ValueError("TypeIndexMap needs at least one type.")
        self._mapping = MappingProxyType(dict(mapping))

    def __getitem__(self, type_name: str) -> IndexClientInterface:
        return self._mapping[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        index_names = {type_name: client.get_index_name() for type_name, client in self._mapping.items()}
        return f"TypeIndexMap({index_names})"

    def get_types(self) -> list[str]:
        """Returns the registered document types, in declaration order."""
        return list(self._mapping)

    def get_clients(self) -> list[IndexClientInterface]:
        """Returns every index client, one per registered type."""
        return list(self._mapping.values())
