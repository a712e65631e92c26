"""Per-action request preparation and response extraction.

Each action is described by the arguments it cannot run without and by how the
result is pulled out of the decoded response:

============  ======================  ==========================================
Action        Required                Result
============  ======================  ==========================================
findOne       -                       ``document`` or None
find          -                       ``documents`` or None
insertOne     document (non-empty)    ``insertedId`` or None
insertMany    documents (non-empty)   ``insertedIds`` or None
updateOne     filter, update          whole response object
updateMany    filter, update          whole response object
replaceOne    filter, replacement     whole response object
deleteOne     filter                  ``deletedCount``, 0 when absent
deleteMany    filter                  ``deletedCount``, 0 when absent
============  ======================  ==========================================

An absent ``deletedCount`` is reported as 0 rather than None so that delete
callers always receive a count.
"""

from typing import Any, Callable

from .constants import (
    Action,
    DELETED_COUNT,
    DOCUMENT,
    DOCUMENTS,
    INSERTED_ID,
    INSERTED_IDS,
)
from .envelope import RequestEnvelope, build_envelope
from .exceptions import DataApiValidationError

Extractor = Callable[[dict[str, Any]], Any]

REQUIRED_FIELDS: dict[Action, tuple[str, ...]] = {
    Action.FIND_ONE: (),
    Action.FIND: (),
    Action.INSERT_ONE: ("document",),
    Action.INSERT_MANY: ("documents",),
    Action.UPDATE_ONE: ("filter", "update"),
    Action.UPDATE_MANY: ("filter", "update"),
    Action.REPLACE_ONE: ("filter", "replacement"),
    Action.DELETE_ONE: ("filter",),
    Action.DELETE_MANY: ("filter",),
}

# An empty filter is a legitimate "match everything"; an empty insert is not.
NON_EMPTY_FIELDS = {"document", "documents"}


def _field(name: str) -> Extractor:
    def extract(data: dict[str, Any]) -> Any:
        return data.get(name)

    return extract


def _deleted_count(data: dict[str, Any]) -> int:
    count = data.get(DELETED_COUNT)
    return 0 if count is None else count


def _whole(data: dict[str, Any]) -> dict[str, Any]:
    return data


EXTRACTORS: dict[Action, Extractor] = {
    Action.FIND_ONE: _field(DOCUMENT),
    Action.FIND: _field(DOCUMENTS),
    Action.INSERT_ONE: _field(INSERTED_ID),
    Action.INSERT_MANY: _field(INSERTED_IDS),
    Action.UPDATE_ONE: _whole,
    Action.UPDATE_MANY: _whole,
    Action.REPLACE_ONE: _whole,
    Action.DELETE_ONE: _deleted_count,
    Action.DELETE_MANY: _deleted_count,
}


def check_required(action: Action, fields: dict[str, Any]) -> None:
    """Raise DataApiValidationError if a required argument of ``action`` is missing."""
    for name in REQUIRED_FIELDS[action]:
        value = fields.get(name)
        if value is None or (name in NON_EMPTY_FIELDS and len(value) == 0):
            raise DataApiValidationError(f"{action} requires '{name}'")


def prepare(action: Action, data_source: str, database: str, collection: str, **fields: Any) -> RequestEnvelope:
    """Validate the arguments of ``action`` and build its request envelope.

    Arguments passed as None are treated as omitted and left out of the envelope.

    Raises:
        DataApiValidationError: A required argument is missing or a value is invalid.
    """
    check_required(action, fields)
    supplied = {k: v for k, v in fields.items() if v is not None}
    return build_envelope(data_source, database, collection, **supplied)


def extract(action: Action, data: dict[str, Any]) -> Any:
    return EXTRACTORS[action](data)
