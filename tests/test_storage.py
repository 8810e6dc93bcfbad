import json

import pytest
from pymongo.errors import PyMongoError

from airport_wordle.config import TestingConfig
from airport_wordle.services.storage import (
    JsonFileStorage, MemoryStorage, MongoStorage, StorageError,
    create_storage_factory, file_storage_factory, memory_storage_factory
)


class FakeCollection:
    """Just enough of a pymongo collection for MongoStorage."""

    def __init__(self, fail=False):
        self.docs = {}
        self.fail = fail

    def find_one(self, query):
        if self.fail:
            raise PyMongoError("unreachable")
        return self.docs.get(query["_id"])

    def update_one(self, query, update, upsert=False):
        if self.fail:
            raise PyMongoError("unreachable")
        assert upsert
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"], "items": {}})
        for path, value in update["$set"].items():
            _, key = path.split(".", 1)
            doc["items"][key] = value


def test_memory_storage():
    storage = MemoryStorage()
    assert storage.get_item("a") is None
    storage.set_item("a", "1")
    assert storage.get_item("a") == "1"


def test_memory_factory_scopes_by_player():
    factory = memory_storage_factory()
    factory("alice").set_item("k", "v")
    assert factory("alice").get_item("k") == "v"
    assert factory("bob").get_item("k") is None


def test_json_file_storage(tmp_path):
    path = tmp_path / "players" / "p1.json"
    storage = JsonFileStorage(path)
    assert storage.get_item("k") is None
    storage.set_item("k", "v")
    storage.set_item("other", "w")
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v", "other": "w"}
    assert JsonFileStorage(path).get_item("k") == "v"


def test_json_file_storage_corrupt_file(tmp_path):
    path = tmp_path / "p1.json"
    path.write_text("{oops", encoding="utf-8")
    storage = JsonFileStorage(path)
    with pytest.raises(StorageError):
        storage.get_item("k")
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_file_factory_rejects_path_like_ids(tmp_path):
    factory = file_storage_factory(str(tmp_path))
    with pytest.raises(StorageError):
        factory("../etc/passwd")
    factory("abc123").set_item("k", "v")
    assert (tmp_path / "abc123.json").exists()


def test_mongo_storage():
    collection = FakeCollection()
    storage = MongoStorage(collection, "p1")
    assert storage.get_item("k") is None
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"
    assert MongoStorage(collection, "p2").get_item("k") is None


def test_mongo_storage_errors_are_wrapped():
    storage = MongoStorage(FakeCollection(fail=True), "p1")
    with pytest.raises(StorageError):
        storage.get_item("k")
    with pytest.raises(StorageError):
        storage.set_item("k", "v")


def test_create_storage_factory_backends(tmp_path):
    class FileConfig(TestingConfig):
        STORAGE_BACKEND = 'file'
        STORAGE_DIR = str(tmp_path)

    class MongoWithoutUri(TestingConfig):
        STORAGE_BACKEND = 'mongo'
        MONGO_URI = None

    class Unknown(TestingConfig):
        STORAGE_BACKEND = 'redis'

    assert isinstance(create_storage_factory(TestingConfig)("p1"), MemoryStorage)
    assert isinstance(create_storage_factory(FileConfig)("p1"), JsonFileStorage)
    with pytest.raises(ValueError):
        create_storage_factory(MongoWithoutUri)
    with pytest.raises(ValueError):
        create_storage_factory(Unknown)


def test_mongo_set_items_is_one_update():
    collection = FakeCollection()
    calls = []
    original = collection.update_one

    def counting_update(query, update, upsert=False):
        calls.append(update)
        return original(query, update, upsert=upsert)

    collection.update_one = counting_update
    storage = MongoStorage(collection, "p1")
    storage.set_items({"a": "1", "b": "2"})
    assert len(calls) == 1
    assert calls[0] == {"$set": {"items.a": "1", "items.b": "2"}}
    assert storage.get_item("a") == "1"
    assert storage.get_item("b") == "2"


def test_json_file_set_items_leaves_no_temp_files(tmp_path):
    storage = JsonFileStorage(tmp_path / "p1.json")
    storage.set_items({"a": "1", "b": "2"})
    storage.set_item("a", "3")
    assert [p.name for p in tmp_path.iterdir()] == ["p1.json"]
    assert storage.get_item("a") == "3"
    assert storage.get_item("b") == "2"


def test_memory_set_items():
    storage = MemoryStorage({"a": "0"})
    storage.set_items({"a": "1", "b": "2"})
    assert storage.items == {"a": "1", "b": "2"}
