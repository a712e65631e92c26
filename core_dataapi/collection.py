"""Collection handles: the nine Data API actions.

Every action is one POST with no retry.  A missing required argument or a
failed request is logged and reported as None, for deletes as well.
A response that cannot be decoded raises :class:`~core_dataapi.exceptions.DataApiDecodeError`.

``Collection`` blocks on each call; ``AsyncCollection`` exposes the same
methods as coroutines.
"""

from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterable, Optional

import core_logging as log

from .constants import Action
from .envelope import decode_response, encode_envelope
from .exceptions import DataApiTransportError, DataApiValidationError
from .pipeline import extract, prepare
from .types import Document, Filter, Sort, Update, UpdateResult

if TYPE_CHECKING:
    from .client import Client, Cluster, Database


class BaseCollection:
    """Address of a collection plus the shared request/response steps."""

    def __init__(self, database: "Database", name: str):
        self._client = database.client
        self._cluster = database.cluster
        self._database = database
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def database(self) -> "Database":
        return self._database

    @property
    def cluster(self) -> "Cluster":
        return self._cluster

    @property
    def client(self) -> "Client":
        return self._client

    def _details(self, action: Action) -> dict[str, Any]:
        return {
            "action": str(action),
            "data_source": self.cluster.name,
            "database": self.database.name,
            "collection": self.name,
        }

    def _begin(self, action: Action, fields: dict[str, Any]) -> Optional[tuple[str, str, dict[str, str]]]:
        """Build (url, body, headers) for ``action``, or None if the arguments are invalid."""
        log.debug(f"dataapi.{action}.start", details=self._details(action))
        try:
            envelope = prepare(action, self.cluster.name, self.database.name, self.name, **fields)
        except DataApiValidationError as e:
            log.warn(f"dataapi.{action}.invalid", details={**self._details(action), "error": str(e)})
            return None
        return self.client.action_url(action), encode_envelope(envelope), self.client.headers()

    def _failed(self, action: Action, error: DataApiTransportError) -> None:
        log.error(
            f"dataapi.{action}.failed",
            details={**self._details(action), "error": str(error), "status_code": error.status_code},
        )

    def _finish(self, action: Action, text: str, start: float) -> Any:
        data = decode_response(text)
        duration = (perf_counter() - start) * 1000
        log.debug(f"dataapi.{action}.success", details={**self._details(action), "duration_ms": round(duration, 2)})
        return extract(action, data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.cluster.name!r}, {self.database.name!r}, {self.name!r})"


class Collection(BaseCollection):
    """Blocking collection handle."""

    def _execute(self, action: Action, **fields: Any) -> Any:
        start = perf_counter()
        request = self._begin(action, fields)
        if request is None:
            return None
        url, body, headers = request
        try:
            text = self.client.transport.post(url, body, headers)
        except DataApiTransportError as e:
            self._failed(action, e)
            return None
        return self._finish(action, text, start)

    def find_one(self, filter: Optional[Filter] = None) -> Optional[Document]:
        """Return the first document matching ``filter``, or None if nothing matches."""
        return self._execute(Action.FIND_ONE, filter=filter)

    def find_many(
        self,
        filter: Optional[Filter] = None,
        *,
        limit: Optional[int] = None,
        sort: Optional[Sort] = None,
        skip: Optional[int] = None,
    ) -> Optional[list[Document]]:
        """Return the documents matching ``filter``.

        Args:
            filter: Query filter.  Omit to match every document.
            limit: Maximum number of documents returned.
            sort: Sort specification, e.g. ``{"created": -1}``.
            skip: Number of matching documents to skip.

        Returns:
            The list of documents, or None if the response carries no ``documents`` field
            or the request failed.
        """
        return self._execute(Action.FIND, filter=filter, limit=limit, sort=sort, skip=skip)

    def insert_one(self, document: Optional[Document] = None) -> Optional[str]:
        """Insert ``document`` and return the server-assigned ``insertedId``."""
        return self._execute(Action.INSERT_ONE, document=document)

    def insert_many(self, documents: Optional[Iterable[Document]] = None) -> Optional[list[str]]:
        """Insert ``documents`` and return the ``insertedIds`` in order."""
        return self._execute(Action.INSERT_MANY, documents=None if documents is None else list(documents))

    def update_one(
        self, filter: Optional[Filter] = None, update: Optional[Update] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        """Update the first match.  Returns ``{matchedCount, modifiedCount, upsertedId?}`` as sent by the server."""
        return self._execute(Action.UPDATE_ONE, filter=filter, update=update, upsert=upsert)

    def update_many(
        self, filter: Optional[Filter] = None, update: Optional[Update] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        return self._execute(Action.UPDATE_MANY, filter=filter, update=update, upsert=upsert)

    def replace_one(
        self, filter: Optional[Filter] = None, replacement: Optional[Document] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        return self._execute(Action.REPLACE_ONE, filter=filter, replacement=replacement, upsert=upsert)

    def delete_one(self, filter: Optional[Filter] = None) -> Optional[int]:
        """Delete the first match and return ``deletedCount`` (0 when the response omits it)."""
        return self._execute(Action.DELETE_ONE, filter=filter)

    def delete_many(self, filter: Optional[Filter] = None) -> Optional[int]:
        return self._execute(Action.DELETE_MANY, filter=filter)


class AsyncCollection(BaseCollection):
    """Awaitable collection handle.  Same methods and results as :class:`Collection`."""

    async def _execute(self, action: Action, **fields: Any) -> Any:
        start = perf_counter()
        request = self._begin(action, fields)
        if request is None:
            return None
        url, body, headers = request
        try:
            text = await self.client.transport.post(url, body, headers)
        except DataApiTransportError as e:
            self._failed(action, e)
            return None
        return self._finish(action, text, start)

    async def find_one(self, filter: Optional[Filter] = None) -> Optional[Document]:
        return await self._execute(Action.FIND_ONE, filter=filter)

    async def find_many(
        self,
        filter: Optional[Filter] = None,
        *,
        limit: Optional[int] = None,
        sort: Optional[Sort] = None,
        skip: Optional[int] = None,
    ) -> Optional[list[Document]]:
        return await self._execute(Action.FIND, filter=filter, limit=limit, sort=sort, skip=skip)

    async def insert_one(self, document: Optional[Document] = None) -> Optional[str]:
        return await self._execute(Action.INSERT_ONE, document=document)

    async def insert_many(self, documents: Optional[Iterable[Document]] = None) -> Optional[list[str]]:
        return await self._execute(Action.INSERT_MANY, documents=None if documents is None else list(documents))

    async def update_one(
        self, filter: Optional[Filter] = None, update: Optional[Update] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        return await self._execute(Action.UPDATE_ONE, filter=filter, update=update, upsert=upsert)

    async def update_many(
        self, filter: Optional[Filter] = None, update: Optional[Update] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        return await self._execute(Action.UPDATE_MANY, filter=filter, update=update, upsert=upsert)

    async def replace_one(
        self, filter: Optional[Filter] = None, replacement: Optional[Document] = None, *, upsert: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        return await self._execute(Action.REPLACE_ONE, filter=filter, replacement=replacement, upsert=upsert)

    async def delete_one(self, filter: Optional[Filter] = None) -> Optional[int]:
        return await self._execute(Action.DELETE_ONE, filter=filter)

    async def delete_many(self, filter: Optional[Filter] = None) -> Optional[int]:
        return await self._execute(Action.DELETE_MANY, filter=filter)
