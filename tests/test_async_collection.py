import httpx
import pytest

from core_dataapi import DataApiDecodeError

ADDRESS = {"dataSource": "Cluster0", "database": "shop", "collection": "orders"}


@pytest.mark.asyncio
async def test_find_one(recorder, async_collection):
    recorder.reply(json_body={"document": {"_id": "1", "x": 1}})

    assert await async_collection.find_one({"_id": "1"}) == {"_id": "1", "x": 1}
    assert str(recorder.last.url).endswith("/endpoint/data/v1/action/findOne")
    assert recorder.body() == {**ADDRESS, "filter": {"_id": "1"}}


@pytest.mark.asyncio
async def test_find_many_limit(recorder, async_collection):
    recorder.reply(json_body={"documents": [{"_id": "1"}, {"_id": "2"}]})

    documents = await async_collection.find_many(limit=2)

    assert len(documents) == 2
    assert recorder.body() == {**ADDRESS, "limit": 2}


@pytest.mark.asyncio
async def test_insert_and_update(recorder, async_collection):
    recorder.reply(json_body={"insertedIds": ["a"]}).reply(json_body={"matchedCount": 0, "modifiedCount": 0, "upsertedId": "z"})

    assert await async_collection.insert_many([{"n": 1}]) == ["a"]
    assert await async_collection.update_one({"n": 2}, {"$set": {"n": 3}}, upsert=True) == {
        "matchedCount": 0,
        "modifiedCount": 0,
        "upsertedId": "z",
    }


@pytest.mark.asyncio
async def test_delete_missing_count_defaults_to_zero(recorder, async_collection):
    recorder.reply(json_body={})
    assert await async_collection.delete_many({"x": 1}) == 0


@pytest.mark.asyncio
async def test_missing_argument_sends_nothing(recorder, async_collection):
    assert await async_collection.replace_one({"_id": "1"}) is None
    assert await async_collection.insert_one() is None
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_transport_failure_returns_none(recorder, async_collection):
    recorder.reply(500, text="internal error").raise_error(httpx.ConnectError)

    assert await async_collection.find_many({"x": 1}) is None
    assert await async_collection.delete_one({"x": 1}) is None


@pytest.mark.asyncio
async def test_malformed_response_raises(recorder, async_collection):
    recorder.reply(text="{not json")
    with pytest.raises(DataApiDecodeError):
        await async_collection.update_many({}, {"$set": {"a": 1}})


@pytest.mark.asyncio
async def test_version_switch(recorder, async_client, async_collection):
    async_client.use_version("beta")
    await async_collection.find_one()
    assert "/endpoint/data/beta/action/findOne" in str(recorder.last.url)


@pytest.mark.asyncio
async def test_find_one_null_document_returns_none(recorder, async_collection):
    recorder.reply(json_body={"document": None}).reply(json_body={})

    assert await async_collection.find_one({"_id": "missing"}) is None
    assert await async_collection.find_one({"_id": "missing"}) is None
    assert len(recorder.requests) == 2
