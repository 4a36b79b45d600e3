"""Enumerations used across the ordering core."""

from enum import Enum


class OrderStatus(str, Enum):
    PLACED = "placed"
    ACTIVATED = "activated"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    JSONL = "jsonl"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
