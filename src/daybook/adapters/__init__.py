"""Adapters - I/O implementations of ports."""

from .file_store import JsonFileStore
from .memory_store import MemoryStore
from .notifiers import ConsoleNotifier, DesktopNotifier

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "ConsoleNotifier",
    "DesktopNotifier",
]
