import asyncio

from services.index_sync.errors import IndexWriteFailure
from shared.clients.index.IndexClientInterface import IndexClientInterface
from shared.clients.index.models.TypeIndexMap import TypeIndexMap
from shared.models.document import IndexRecord
from shared.models.sync import ChangeSet


class IndexDispatcher:
    """Routes saves to the index of each record's type and broadcasts deletes to every index.

    Saves across types run concurrently and all complete before any delete
    is issued. Nothing is rolled back when one index fails.
    """

    def __init__(self, type_index_map: TypeIndexMap) -> None:
        self._type_index_map = type_index_map

    async def dispatch(self, change_set: ChangeSet) -> None:
        """Apply a change set to the indices.

        Raises:
            IndexWriteFailure: If a save or delete call fails. When saves fail
                no delete is issued.
        """
        await self.save(change_set.to_save)
        await self.delete(change_set.to_delete)

    def partition(self, records: list[IndexRecord]) -> dict[str, list[IndexRecord]]:
        """Group records by type. Only non-empty partitions are returned.

        Raises:
            IndexWriteFailure: If a record's type has no registered index.
        """
        partitions: dict[str, list[IndexRecord]] = {}
        for record in records:
            if record.type not in self._type_index_map:
                raise IndexWriteFailure("<unregistered>", "save", f"no index registered for type '{record.type}'")
            partitions.setdefault(record.type, []).append(record)
        return partitions

    async def save(self, records: list[IndexRecord]) -> None:
        partitions = self.partition(records)
        await self._gather(
            self._save(self._type_index_map[type_name], partition)
            for type_name, partition in partitions.items()
        )

    async def delete(self, ids: list[str]) -> None:
        if not ids:
            return
        await self._gather(self._delete(client, ids) for client in self._type_index_map.get_clients())

    async def _gather(self, calls) -> None:
        """Run index calls concurrently, wait for all of them and raise the first failure."""
        results = await asyncio.gather(*calls, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _save(self, client: IndexClientInterface, records: list[IndexRecord]) -> None:
        try:
            await client.do_save_objects(records)
        except Exception as exc:
            raise IndexWriteFailure(client.get_index_name(), "save", str(exc)) from exc

    async def _delete(self, client: IndexClientInterface, ids: list[str]) -> None:
        try:
            await client.do_delete_objects(list(ids))
        except Exception as exc:
            raise IndexWriteFailure(client.get_index_name(), "delete", str(exc)) from exc
