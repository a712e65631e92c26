"""Request envelope model and JSON codec for the Data API.

Every action posts a JSON object that names its target with the addressing
triple (``dataSource``, ``database``, ``collection``) followed by the
action-specific fields.  Optional fields the caller did not supply are left out
of the body entirely; they are never sent as ``null``.

Example:
    .. code-block:: python

        envelope = RequestEnvelope(
            data_source="Cluster0",
            database="shop",
            collection="orders",
            filter={"status": "open"},
            limit=10,
        )
        body = encode_envelope(envelope)
        # '{"dataSource": "Cluster0", "database": "shop", "collection": "orders",
        #   "filter": {"status": "open"}, "limit": 10}'
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

import core_framework as util

from .exceptions import DataApiDecodeError, DataApiValidationError
from .types import Document, Envelope, Filter, Sort, Update


class RequestEnvelope(BaseModel):
    """JSON body of a single Data API action.

    Attributes:
        data_source (str): Cluster name, sent as ``dataSource``.
        database (str): Database name.
        collection (str): Collection name.
        filter (dict, optional): Query filter.
        document (dict, optional): Document for insertOne.
        documents (list, optional): Documents for insertMany.
        update (dict, optional): Update operators for updateOne/updateMany.
        replacement (dict, optional): Replacement document for replaceOne.
        upsert (bool, optional): Insert when nothing matches.
        limit (int, optional): Maximum documents returned by find.
        sort (dict, optional): Sort specification for find.
        skip (int, optional): Documents skipped by find.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    data_source: str = Field(..., alias="dataSource")
    database: str
    collection: str
    filter: Optional[Filter] = None
    document: Optional[Document] = None
    documents: Optional[list[Document]] = None
    update: Optional[Update] = None
    replacement: Optional[Document] = None
    upsert: Optional[bool] = None
    limit: Optional[int] = Field(default=None, ge=0)
    sort: Optional[Sort] = None
    skip: Optional[int] = Field(default=None, ge=0)

    def to_body(self) -> Envelope:
        """Wire representation with aliases applied and omitted fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


def build_envelope(data_source: str, database: str, collection: str, **fields: Any) -> RequestEnvelope:
    """Build an envelope from the addressing triple and action fields.

    Raises:
        DataApiValidationError: A field value failed model validation (e.g. a negative limit).
    """
    try:
        return RequestEnvelope(data_source=data_source, database=database, collection=collection, **fields)
    except ValidationError as e:
        raise DataApiValidationError(f"Invalid request arguments: {e.errors(include_url=False)}") from e


def encode_envelope(envelope: RequestEnvelope) -> str:
    return util.to_json(envelope.to_body())


def decode_response(text: str) -> dict[str, Any]:
    """Decode a response body into a JSON object.

    Raises:
        DataApiDecodeError: The text is not valid JSON or is not a JSON object.
    """
    try:
        data = util.from_json(text)
    except (ValueError, TypeError) as e:
        raise DataApiDecodeError("Data API response is not valid JSON") from e

    if not isinstance(data, dict):
        raise DataApiDecodeError(f"Data API response is not a JSON object: {type(data).__name__}")

    return data
