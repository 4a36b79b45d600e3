"""Order aggregate: a state machine derived entirely from its events.

Every state change goes through ``_apply``.  Commands validate intent,
build an event, and hand it to ``_apply`` with ``is_new=True``; replay
feeds stored history through the same routine with ``is_new=False``.
There is no setter for ``id`` or ``status``.

Status transitions::

    (zero) --OrderPlaced--> PLACED --OrderActivated--> ACTIVATED

``activate`` on anything other than PLACED is a no-op, not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from cqrs_order.core.enums import OrderStatus
from cqrs_order.core.errors import (
    AlreadyPlaced,
    EmptyOrderLine,
    ForeignEvent,
    MissingOrderId,
)
from cqrs_order.domain.commands import Line
from cqrs_order.domain.events import DomainEvent, OrderActivated, OrderPlaced

logger = logging.getLogger(__name__)


class Order:
    """Aggregate root for a single order.

    ``Order("ABC123")`` creates a zero-state order *seeded* with the
    identifier that ``place`` will stamp on its event.  The identifier is
    only assigned (``order.id``) once an event has been applied.
    """

    def __init__(self, order_id: str = "") -> None:
        self._seed_id = order_id
        self._id = ""
        self._status: OrderStatus | None = None
        self._version = 0
        self._uncommitted: list[DomainEvent] = []

    # -- Read-only state ---------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def status(self) -> OrderStatus | None:
        return self._status

    @property
    def version(self) -> int:
        """Number of events applied, replayed or new."""
        return self._version

    @property
    def uncommitted(self) -> tuple[DomainEvent, ...]:
        """Events generated since this instance was loaded or last saved."""
        return tuple(self._uncommitted)

    # -- Operations --------------------------------------------------------

    def place(self, lines: Sequence[Line]) -> OrderPlaced:
        """Place the order.

        Raises:
            AlreadyPlaced: the order already has an assigned identifier.
            EmptyOrderLine: ``lines`` is empty.
            MissingOrderId: the order was not seeded with an identifier.
        """
        if self._id:
            raise AlreadyPlaced(self._id)
        if not lines:
            raise EmptyOrderLine(self._seed_id)
        if not self._seed_id:
            raise MissingOrderId()

        event = OrderPlaced(order_id=self._seed_id)
        self._apply(event, is_new=True)
        return event

    def activate(self) -> OrderActivated | None:
        """Activate a placed order.  Returns ``None`` when nothing changed."""
        if self._status is not OrderStatus.PLACED:
            logger.debug(
                "Activate ignored for order %r in status %s", self._id, self._status,
            )
            return None

        event = OrderActivated(order_id=self._id)
        self._apply(event, is_new=True)
        return event

    def mark_committed(self) -> None:
        """Forget uncommitted events once they are persisted."""
        self._uncommitted.clear()

    # -- Replay ------------------------------------------------------------

    @classmethod
    def replay(cls, events: Iterable[DomainEvent]) -> Order:
        """Fold *events* in order into a fresh order."""
        order = cls()
        for event in events:
            order._apply(event, is_new=False)
        return order

    # -- Event application ---------------------------------------------------

    def _apply(self, event: DomainEvent, is_new: bool) -> None:
        if self._id and event.order_id != self._id:
            raise ForeignEvent(event.order_id, self._id)
        self._id = event.order_id

        match event:
            case OrderPlaced():
                self._status = OrderStatus.PLACED
            case OrderActivated():
                self._status = OrderStatus.ACTIVATED
            case _:
                # Unknown variants still count toward history.
                logger.debug("No transition for %s", type(event).__name__)

        self._version += 1
        if is_new:
            self._uncommitted.append(event)

    def __repr__(self) -> str:
        status = self._status.value if self._status else None
        return (
            f"Order(id={self._id!r}, status={status!r}, "
            f"version={self._version}, uncommitted={len(self._uncommitted)})"
        )
