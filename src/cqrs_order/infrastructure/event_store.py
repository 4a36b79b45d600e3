"""Append-only event store, keyed by order identifier.

Design invariants
-----------------
1.  ``append()`` adds events to the tail of an order's history in the
    order given.  It never reorders, deduplicates, or rejects on
    version; there is no optimistic-concurrency check.
2.  ``load()`` returns an order's events in **append order**.
3.  An order with zero events is indistinguishable from an unknown one:
    ``load()`` raises ``OrderNotFound`` for both.
4.  The store is **append-only**: events can never be deleted or
    modified.  ``clear()`` exists only for testing.
5.  ``append()`` and ``load()`` are serialized by a lock, so a load never
    observes half of an append.

This module provides:

*  ``IEventStore``: the protocol.
*  ``InMemoryEventStore``: simple list-backed implementation for
   testing and local development.
*  ``JsonFileEventStore``: append-to-JSONL-file implementation for
   durable local persistence.
*  ``build_event_store``: picks an implementation from ``Settings``.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from cqrs_order.core.config import Settings
from cqrs_order.core.enums import StoreBackend
from cqrs_order.core.errors import ConfigError, OrderNotFound, StoreError
from cqrs_order.domain.events import ALL_DOMAIN_EVENTS, DomainEvent

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON helpers (datetime safe)
# ---------------------------------------------------------------------------

class _EventEncoder(json.JSONEncoder):
    """Handles datetime serialization."""

    def default(self, o: Any) -> Any:
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def _event_to_dict(event: DomainEvent) -> dict[str, Any]:
    """Serialize a frozen dataclass to a JSON-safe dict."""
    d = dataclasses.asdict(event)
    d["__event_type__"] = type(event).__qualname__
    return d


def _event_from_dict(
    d: dict[str, Any],
    registry: dict[str, type[DomainEvent]],
) -> DomainEvent | None:
    """Deserialize a dict back into a DomainEvent subclass.

    Returns ``None`` if the event type is unrecognized (forward compat).
    """
    type_name = d.pop("__event_type__", None)
    if type_name is None or type_name not in registry:
        return None
    cls = registry[type_name]

    known = {f.name for f in dataclasses.fields(cls)}
    restored: dict[str, Any] = {}
    for k, v in d.items():
        if k not in known:
            continue
        if k == "timestamp" and isinstance(v, str):
            restored[k] = datetime.fromisoformat(v)
        else:
            restored[k] = v
    return cls(**restored)


def _check_ownership(order_id: str, events: Sequence[DomainEvent]) -> None:
    for event in events:
        if event.order_id != order_id:
            raise StoreError(
                f"cannot append event of order {event.order_id!r} "
                f"to history of {order_id!r}"
            )


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventStore(Protocol):
    """Append-only, per-order event log."""

    def append(self, order_id: str, events: Sequence[DomainEvent]) -> None:
        """Add *events* to the tail of *order_id*'s history."""
        ...

    def load(self, order_id: str) -> list[DomainEvent]:
        """Return *order_id*'s full history.  Raises ``OrderNotFound``."""
        ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------

class InMemoryEventStore:
    """List-backed event store.  No persistence across restarts.

    Good for: unit tests, local development.
    """

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []
        self._lock = threading.Lock()

    def append(self, order_id: str, events: Sequence[DomainEvent]) -> None:
        if not events:
            return
        _check_ownership(order_id, events)
        with self._lock:
            self._events.extend(events)
        logger.debug("Appended %d event(s) for order %r", len(events), order_id)

    def load(self, order_id: str) -> list[DomainEvent]:
        with self._lock:
            result = [e for e in self._events if e.order_id == order_id]
        if not result:
            raise OrderNotFound(order_id)
        return result

    # -- Testing helpers ---------------------------------------------------

    def clear(self) -> None:
        """Remove all events.  Testing only."""
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


# ---------------------------------------------------------------------------
# JSON-Lines file implementation
# ---------------------------------------------------------------------------

class JsonFileEventStore:
    """Append-only JSONL file store.  Durable across restarts.

    Each line is a JSON object with an ``__event_type__`` discriminator.
    Lines that fail to parse or name an unknown event type are skipped.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._registry: dict[str, type[DomainEvent]] = {
            cls.__qualname__: cls for cls in ALL_DOMAIN_EVENTS
        }

    @property
    def path(self) -> Path:
        return self._path

    def append(self, order_id: str, events: Sequence[DomainEvent]) -> None:
        if not events:
            return
        _check_ownership(order_id, events)
        payload = "".join(
            json.dumps(_event_to_dict(e), cls=_EventEncoder) + "\n"
            for e in events
        )
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(payload)
        logger.debug(
            "Appended %d event(s) for order %r to %s", len(events), order_id, self._path,
        )

    def load(self, order_id: str) -> list[DomainEvent]:
        result: list[DomainEvent] = []
        with self._lock:
            if self._path.exists():
                with self._path.open(encoding="utf-8", errors="replace") as f:
                    for lineno, line in enumerate(f, start=1):
                        event = self._parse_line(line, lineno, order_id)
                        if event is not None:
                            result.append(event)
        if not result:
            raise OrderNotFound(order_id)
        return result

    def _parse_line(
        self, line: str, lineno: int, order_id: str,
    ) -> DomainEvent | None:
        """Decode one stored line if it belongs to *order_id*.

        Blank lines, lines for other orders, and unknown event types yield
        ``None``.  Undecodable or malformed lines are logged and skipped.
        """
        line = line.strip()
        if not line:
            return None
        try:
            d = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Skipping malformed line %d in %s", lineno, self._path)
            return None
        if not isinstance(d, dict):
            logger.warning("Skipping non-object line %d in %s", lineno, self._path)
            return None
        if d.get("order_id") != order_id:
            return None
        try:
            return _event_from_dict(d, self._registry)
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Skipping invalid event on line %d in %s: %s", lineno, self._path, exc,
            )
            return None


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_event_store(settings: Settings) -> IEventStore:
    """Create the event store selected by ``settings.store``."""
    settings.validate_store()
    backend = settings.store.backend
    if backend == StoreBackend.MEMORY:
        return InMemoryEventStore()
    if backend == StoreBackend.JSONL:
        return JsonFileEventStore(settings.store.path)
    raise ConfigError(f"Unsupported store backend: {backend!r}")
