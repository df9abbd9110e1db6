"""Local key-value storage"""
from .key_value_store import KeyValueStore

__all__ = ["KeyValueStore"]
