import pytest

from core_dataapi import (
    Action,
    ApiVersion,
    AsyncCollection,
    Client,
    Collection,
    new_async_client,
    new_client,
)

from .conftest import API_KEY, APP_ID


def test_handle_chain_addressing():
    client = new_client(APP_ID, API_KEY)
    cluster = client.get_cluster("Cluster0")
    database = cluster.get_database("shop")
    orders = database.get_collection("orders")

    assert client.app_id == APP_ID
    assert client.api_key == API_KEY
    assert cluster.name == "Cluster0"
    assert cluster.client is client
    assert database.name == "shop"
    assert database.cluster is cluster
    assert database.client is client
    assert isinstance(orders, Collection)
    assert orders.name == "orders"
    assert orders.database is database
    assert orders.cluster is cluster
    assert orders.client is client

    # a sibling handle does not disturb the first one
    database.get_collection("invoices")
    client.get_cluster("Cluster1").get_database("other").get_collection("x")
    assert (orders.cluster.name, orders.database.name, orders.name) == ("Cluster0", "shop", "orders")


def test_handles_are_read_only():
    orders = new_client(APP_ID, API_KEY).get_cluster("c").get_database("d").get_collection("e")
    with pytest.raises(AttributeError):
        orders.name = "other"
    with pytest.raises(AttributeError):
        orders.database = None


def test_default_base_url():
    client = new_client(APP_ID, API_KEY)
    assert client.version == ApiVersion.V1
    assert client.base_url == "https://data.mongodb-api.com/app/data-abcde/endpoint/data/v1"
    assert client.action_url(Action.FIND_ONE) == "https://data.mongodb-api.com/app/data-abcde/endpoint/data/v1/action/findOne"
    assert client.action_url(Action.FIND) == "https://data.mongodb-api.com/app/data-abcde/endpoint/data/v1/action/find"


def test_base_url_override():
    client = Client(APP_ID, API_KEY, base_url="http://localhost:9000/")
    assert client.base_url == "http://localhost:9000/app/data-abcde/endpoint/data/v1"


def test_endpoint_table_is_complete():
    paths = {action: action.path for action in Action}
    assert len(paths) == 9
    assert paths[Action.INSERT_MANY] == "/action/insertMany"
    assert paths[Action.DELETE_MANY] == "/action/deleteMany"
    assert all(p.startswith("/action/") for p in paths.values())


def test_use_version_is_per_client():
    first = new_client(APP_ID, API_KEY)
    second = new_client("data-other", API_KEY)

    first.use_version("beta")

    assert first.version == ApiVersion.BETA
    assert first.base_url.endswith("/endpoint/data/beta")
    assert second.version == ApiVersion.V1
    assert second.base_url.endswith("/endpoint/data/v1")


def test_version_constructor_argument():
    client = new_client(APP_ID, API_KEY, version="beta")
    assert client.base_url.endswith("/beta")


def test_unknown_version_rejected():
    client = new_client(APP_ID, API_KEY)
    with pytest.raises(ValueError):
        client.use_version("v2")
    assert client.version == ApiVersion.V1


def test_headers():
    headers = new_client(APP_ID, API_KEY).headers()
    assert headers["api-key"] == API_KEY
    assert headers["Content-Type"] == "application/json"
    assert headers["Access-Control-Request-Headers"] == "*"


def test_repr_hides_api_key():
    client = new_client(APP_ID, API_KEY)
    assert API_KEY not in repr(client)
    orders = client.get_cluster("Cluster0").get_database("shop").get_collection("orders")
    assert repr(orders) == "Collection('Cluster0', 'shop', 'orders')"


def test_async_client_returns_async_collections():
    client = new_async_client(APP_ID, API_KEY)
    orders = client.get_cluster("Cluster0").get_database("shop").get_collection("orders")
    assert isinstance(orders, AsyncCollection)
    assert orders.client is client
