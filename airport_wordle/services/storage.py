"""
Player Storage

Small key/value stores, one per player, with the get_item/set_item contract
of browser local storage. The daily session store writes its two keys
through this interface, so the backend can be swapped without touching game
logic.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..utils.game_logger import game_logger

PLAYER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class StorageError(Exception):
    """The storage backend failed to read or write."""


class Storage:
    """Key/value storage scoped to one player."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def set_items(self, items: Mapping[str, str]) -> None:
        """
        Writes several keys. Backends that can make this a single write
        override it; the fallback writes them one by one in the given order.
        """
        for key, value in items.items():
            self.set_item(key, value)


class MemoryStorage(Storage):
    """Process-local storage; lost on restart."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def set_items(self, items: Mapping[str, str]) -> None:
        self.items.update(items)


class JsonFileStorage(Storage):
    """One JSON object per player on disk, replaced atomically on write."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: Mapping[str, str]) -> None:
        try:
            data = self._read()
        except StorageError:
            data = {}
        data.update(items)

        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # A unique temp file per write, so concurrent writers never share one
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp and os.path.exists(tmp):
                os.remove(tmp)
            raise StorageError(f"Cannot write {self.path}: {e}") from e


class MongoStorage(Storage):
    """
    One MongoDB document per player:
    ``{"_id": player_id, "items": {key: value}}``.
    """

    def __init__(self, collection, player_id: str):
        self.collection = collection
        self.player_id = player_id

    def get_item(self, key: str) -> Optional[str]:
        try:
            doc = self.collection.find_one({"_id": self.player_id})
        except PyMongoError as e:
            raise StorageError(f"MongoDB read failed for {self.player_id}: {e}") from e
        if not doc:
            return None
        return (doc.get("items") or {}).get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: Mapping[str, str]) -> None:
        try:
            self.collection.update_one(
                {"_id": self.player_id},
                {"$set": {f"items.{key}": value for key, value in items.items()}},
                upsert=True
            )
        except PyMongoError as e:
            raise StorageError(f"MongoDB write failed for {self.player_id}: {e}") from e


StorageFactory = Callable[[str], Storage]


def validate_player_id(player_id: str) -> str:
    if not player_id or not PLAYER_ID_PATTERN.match(player_id):
        raise StorageError(f"Invalid player id: {player_id!r}")
    return player_id


def memory_storage_factory() -> StorageFactory:
    stores: Dict[str, MemoryStorage] = {}

    def factory(player_id: str) -> Storage:
        validate_player_id(player_id)
        if player_id not in stores:
            stores[player_id] = MemoryStorage()
        return stores[player_id]

    return factory


def file_storage_factory(storage_dir: str) -> StorageFactory:
    base = Path(storage_dir)

    def factory(player_id: str) -> Storage:
        return JsonFileStorage(base / f"{validate_player_id(player_id)}.json")

    return factory


def mongo_storage_factory(mongo_uri: str, db_name: str = 'airport_wordle') -> StorageFactory:
    """
    Connects to MongoDB once and hands out per-player views of the
    ``player_storage`` collection.
    """
    client = MongoClient(mongo_uri, server_api=ServerApi('1'))
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        game_logger.logger.error(f"MongoDB connection error: {e}")
        raise StorageError(f"MongoDB connection failed: {e}") from e

    collection = client[db_name].player_storage
    game_logger.logger.info(f"Connected to MongoDB database '{db_name}' for player storage")

    def factory(player_id: str) -> Storage:
        return MongoStorage(collection, validate_player_id(player_id))

    return factory


def create_storage_factory(config_class) -> StorageFactory:
    """
    Builds the storage factory named by ``STORAGE_BACKEND``.

    Raises:
        ValueError: For an unknown backend or a mongo backend without MONGO_URI
    """
    backend = (getattr(config_class, 'STORAGE_BACKEND', 'memory') or 'memory').lower()

    if backend == 'memory':
        return memory_storage_factory()
    if backend == 'file':
        return file_storage_factory(config_class.STORAGE_DIR)
    if backend == 'mongo':
        if not config_class.MONGO_URI:
            raise ValueError("STORAGE_BACKEND is 'mongo' but MONGO_URI is not configured")
        return mongo_storage_factory(config_class.MONGO_URI, config_class.MONGO_DB)

    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'. Must be 'memory', 'file' or 'mongo'")
