from typing import Any

Document = dict[str, Any]

Filter = dict[str, Any]

Update = dict[str, Any]

Sort = dict[str, int]

UpdateResult = dict[str, Any]

Envelope = dict[str, Any]
