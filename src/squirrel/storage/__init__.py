"""Storage layer for squirrel."""

from squirrel.storage.base import FileStore
from squirrel.storage.local import LocalFileStore
from squirrel.storage.memory import MemoryFileStore

__all__ = ["FileStore", "LocalFileStore", "MemoryFileStore"]
