"""Simple Cloud Kit Data API Client Package.

The core_dataapi package lets an application read and write documents through
the MongoDB Atlas Data API without building HTTP requests by hand.  Targets are
addressed with a chain of lightweight handles and each collection action is
translated into a single JSON POST.

Key Components:
    - **Handles**: Client → Cluster → Database → Collection (client.py)
    - **Actions**: findOne, find, insertOne, insertMany, updateOne, updateMany,
      replaceOne, deleteOne, deleteMany (collection.py)
    - **Request Envelope**: Pydantic model of the JSON request body (envelope.py)
    - **Pipeline**: Argument checks and result extraction per action (pipeline.py)
    - **Transport**: httpx based blocking and async POST (transport.py)

Usage Examples:

    **Blocking**:

    .. code-block:: python

        from core_dataapi import new_client

        client = new_client("data-abcde", "my-api-key")
        users = client.get_cluster("Cluster0").get_database("app").get_collection("users")

        user_id = users.insert_one({"name": "ada"})
        user = users.find_one({"_id": {"$oid": user_id}})
        recent = users.find_many({"active": True}, sort={"created": -1}, limit=10)
        deleted = users.delete_many({"active": False})

    **Async**:

    .. code-block:: python

        from core_dataapi import new_async_client

        client = new_async_client("data-abcde", "my-api-key", version="beta")
        users = client.get_cluster("Cluster0").get_database("app").get_collection("users")

        result = await users.update_one({"name": "ada"}, {"$set": {"active": True}}, upsert=True)

Results:
    - find_one / find_many / insert_one / insert_many return None when the
      expected response field is absent.
    - update_one / update_many / replace_one return the response object as sent
      (``matchedCount``, ``modifiedCount``, ``upsertedId``).
    - delete_one / delete_many return ``deletedCount``, or 0 when it is absent.
    - Every action returns None when a required argument is missing (no request
      is sent) or the request fails.  Both cases are logged.
    - A response body that is not a JSON object raises DataApiDecodeError.

Dependencies:
    - httpx: HTTP transport
    - pydantic: Request envelope model
    - sck-core-framework: JSON encoding and decoding
    - sck-core-logging: Structured logging

License: MIT
"""

from .client import AsyncClient, Client, Cluster, Database, new_async_client, new_client
from .collection import AsyncCollection, Collection
from .constants import Action, ApiVersion
from .exceptions import DataApiDecodeError, DataApiError, DataApiTransportError, DataApiValidationError
from .transport import AsyncDataApiTransport, DataApiTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "new_client",
    "new_async_client",
    "Client",
    "AsyncClient",
    "Cluster",
    "Database",
    "Collection",
    "AsyncCollection",
    "Action",
    "ApiVersion",
    "DataApiError",
    "DataApiValidationError",
    "DataApiTransportError",
    "DataApiDecodeError",
    "DataApiTransport",
    "AsyncDataApiTransport",
]
