from enum import Enum
import os


class ApiVersion(str, Enum):
    """Data API versions accepted in the base URL."""

    V1 = "v1"
    BETA = "beta"

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    """Data API actions and the URL path suffix each one posts to."""

    FIND_ONE = "findOne"
    FIND = "find"
    INSERT_ONE = "insertOne"
    INSERT_MANY = "insertMany"
    UPDATE_ONE = "updateOne"
    UPDATE_MANY = "updateMany"
    REPLACE_ONE = "replaceOne"
    DELETE_ONE = "deleteOne"
    DELETE_MANY = "deleteMany"

    def __str__(self) -> str:
        return self.value

    @property
    def path(self) -> str:
        return f"/action/{self.value}"


ENDPOINTS: dict[Action, str] = {action: action.path for action in Action}

DEFAULT_API_VERSION = ApiVersion.V1

# e.g.  https://data.mongodb-api.com/app/data-abcde/endpoint/data/v1
DATA_API_HOST = "https://data.mongodb-api.com"
BASE_URL_TEMPLATE = "{host}/app/{app_id}/endpoint/data/{version}"

# Request envelope fields
DATA_SOURCE = "dataSource"
DATABASE = "database"
COLLECTION = "collection"

# Response envelope fields
DOCUMENT = "document"
DOCUMENTS = "documents"
INSERTED_ID = "insertedId"
INSERTED_IDS = "insertedIds"
MATCHED_COUNT = "matchedCount"
MODIFIED_COUNT = "modifiedCount"
UPSERTED_ID = "upsertedId"
DELETED_COUNT = "deletedCount"

# Request headers
HDR_API_KEY = "api-key"
HDR_CONTENT_TYPE = "Content-Type"
HDR_ACCEPT = "Accept"
HDR_ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"
HDR_X_CORRELATION_ID = "X-Correlation-ID"

CONTENT_TYPE_JSON = "application/json"

# Transport tunables.  Credentials and the API version are never read from the environment.
try:
    TIMEOUT_SECONDS = float(os.getenv("CORE_DATAAPI_TIMEOUT_SECONDS", "30"))
except (ValueError, TypeError):
    TIMEOUT_SECONDS = 30.0

try:
    CONNECT_TIMEOUT_SECONDS = float(os.getenv("CORE_DATAAPI_CONNECT_TIMEOUT_SECONDS", "5"))
except (ValueError, TypeError):
    CONNECT_TIMEOUT_SECONDS = 5.0

try:
    SLOW_WARN_MS = int(os.getenv("CORE_DATAAPI_SLOW_WARN_MS", "5000"))
except (ValueError, TypeError):
    SLOW_WARN_MS = 5000
