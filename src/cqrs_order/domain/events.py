"""Domain events for the Order aggregate.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``).
2.  Every event carries the ``order_id`` of the aggregate that owns it.
    An event never belongs to more than one order.
3.  ``event_id`` is a UUID4 generated at creation time.
4.  Order of events within one ``order_id`` is causal order; the store
    must hand them back exactly as appended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from cqrs_order.core.ids import new_id as _uuid
from cqrs_order.core.ids import utc_now as _now

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Immutable base for every Order event.

    Shared fields
    ~~~~~~~~~~~~~
    order_id    Identifier of the owning aggregate.
    event_id    Unique identity (UUID4).
    timestamp   UTC creation time.
    """

    order_id: str = ""
    event_id: str = field(default_factory=_uuid)
    timestamp: datetime = field(default_factory=_now)


# =========================================================================
# Order lifecycle
# =========================================================================

@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """The order was placed with at least one line."""


@dataclass(frozen=True)
class OrderActivated(DomainEvent):
    """A placed order was activated."""


#: All known event types in a deterministic order.  Used by stores that
#: need to map a serialized type name back to its class.
ALL_DOMAIN_EVENTS: tuple[type[DomainEvent], ...] = (
    OrderPlaced,
    OrderActivated,
)
