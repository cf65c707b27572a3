"""Key-value storage backends for the score store."""

from mathrush.storage.factory import create_storage
from mathrush.storage.json_file_storage import JsonFileStorage
from mathrush.storage.memory_storage import InMemoryStorage

__all__ = ["create_storage", "InMemoryStorage", "JsonFileStorage"]
