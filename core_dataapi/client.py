"""Client, cluster and database handles.

Handles only carry names and back-references to their parents.  They perform
no I/O when created, so a cluster, database or collection that does not exist
is only reported by the Data API when an action is attempted.

Example:
    .. code-block:: python

        from core_dataapi import new_client

        client = new_client("data-abcde", api_key)
        orders = client.get_cluster("Cluster0").get_database("shop").get_collection("orders")

        order = orders.find_one({"_id": "1"})
        orders.update_one({"_id": "1"}, {"$set": {"status": "shipped"}})

        client.use_version("beta")  # later requests from this client only
"""

from typing import Optional, Union

import core_logging as log

from .constants import (
    Action,
    ApiVersion,
    BASE_URL_TEMPLATE,
    CONTENT_TYPE_JSON,
    DATA_API_HOST,
    DEFAULT_API_VERSION,
    HDR_ACCEPT,
    HDR_ACCESS_CONTROL_REQUEST_HEADERS,
    HDR_API_KEY,
    HDR_CONTENT_TYPE,
    HDR_X_CORRELATION_ID,
)
from .collection import AsyncCollection, BaseCollection, Collection
from .transport import AsyncDataApiTransport, DataApiTransport, get_async_transport, get_transport


class Client:
    """Root handle holding the Data API application id, API key and version.

    Args:
        app_id (str): Data API application id, e.g. ``"data-abcde"``.
        api_key (str): Secret API key sent in the ``api-key`` header.
        version (str): ``"v1"`` (default) or ``"beta"``.
        base_url (str): Host part of the Data API URL.  Override for emulators.
        transport: Transport used for this client's requests.  Defaults to the shared transport.
    """

    collection_class: type[BaseCollection] = Collection

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        version: Union[ApiVersion, str] = DEFAULT_API_VERSION,
        base_url: str = DATA_API_HOST,
        transport: Optional[DataApiTransport] = None,
    ):
        self._app_id = app_id
        self._api_key = api_key
        self._version = ApiVersion(version)
        self._host = base_url.rstrip("/")
        self._transport = transport

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def version(self) -> ApiVersion:
        return self._version

    def use_version(self, version: Union[ApiVersion, str]) -> "Client":
        """Select the API version for every later request issued through this client.

        Handles already obtained from this client follow the change.  Other clients are unaffected.

        Raises:
            ValueError: ``version`` is not a known API version.
        """
        self._version = ApiVersion(version)
        log.debug("dataapi.client.version", details={"app_id": self._app_id, "version": str(self._version)})
        return self

    @property
    def base_url(self) -> str:
        return BASE_URL_TEMPLATE.format(host=self._host, app_id=self._app_id, version=self._version.value)

    def action_url(self, action: Action) -> str:
        return f"{self.base_url}{action.path}"

    def headers(self) -> dict[str, str]:
        headers = {
            HDR_API_KEY: self._api_key,
            HDR_CONTENT_TYPE: CONTENT_TYPE_JSON,
            HDR_ACCEPT: CONTENT_TYPE_JSON,
            HDR_ACCESS_CONTROL_REQUEST_HEADERS: "*",
        }
        corr_id = log.get_correlation_id()
        if corr_id:
            headers[HDR_X_CORRELATION_ID] = corr_id
        return headers

    @property
    def transport(self) -> DataApiTransport:
        return self._transport or get_transport()

    def get_cluster(self, name: str) -> "Cluster":
        return Cluster(self, name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(app_id={self._app_id!r}, version={self._version.value!r})"


class AsyncClient(Client):
    """Client whose collections expose awaitable actions."""

    collection_class = AsyncCollection

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        version: Union[ApiVersion, str] = DEFAULT_API_VERSION,
        base_url: str = DATA_API_HOST,
        transport: Optional[AsyncDataApiTransport] = None,
    ):
        super().__init__(app_id, api_key, version=version, base_url=base_url)
        self._transport = transport

    @property
    def transport(self) -> AsyncDataApiTransport:
        return self._transport or get_async_transport()


class Cluster:
    """Named data source (``dataSource`` in requests)."""

    def __init__(self, client: Client, name: str):
        self._client = client
        self._name = name

    @property
    def client(self) -> Client:
        return self._client

    @property
    def name(self) -> str:
        return self._name

    def get_database(self, name: str) -> "Database":
        return Database(self, name)

    def __repr__(self) -> str:
        return f"Cluster({self._name!r})"


class Database:
    """Named database within a cluster."""

    def __init__(self, cluster: Cluster, name: str):
        self._client = cluster.client
        self._cluster = cluster
        self._name = name

    @property
    def client(self) -> Client:
        return self._client

    @property
    def cluster(self) -> Cluster:
        return self._cluster

    @property
    def name(self) -> str:
        return self._name

    def get_collection(self, name: str) -> BaseCollection:
        """Return a :class:`Collection`, or an :class:`AsyncCollection` for an :class:`AsyncClient`."""
        return self._client.collection_class(self, name)

    def __repr__(self) -> str:
        return f"Database({self._cluster.name!r}, {self._name!r})"


def new_client(
    app_id: str,
    api_key: str,
    *,
    version: Union[ApiVersion, str] = DEFAULT_API_VERSION,
    transport: Optional[DataApiTransport] = None,
) -> Client:
    return Client(app_id, api_key, version=version, transport=transport)


def new_async_client(
    app_id: str,
    api_key: str,
    *,
    version: Union[ApiVersion, str] = DEFAULT_API_VERSION,
    transport: Optional[AsyncDataApiTransport] = None,
) -> AsyncClient:
    return AsyncClient(app_id, api_key, version=version, transport=transport)
