"""Ports - interfaces/protocols for external dependencies."""

from .key_value_store import KeyValueStore
from .notifier import Notifier

__all__ = [
    "KeyValueStore",
    "Notifier",
]
