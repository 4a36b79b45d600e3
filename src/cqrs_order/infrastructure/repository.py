"""Order repository: load by replay, save by appending uncommitted events."""

from __future__ import annotations

from cqrs_order.core.errors import OrderNotFound
from cqrs_order.domain.events import DomainEvent
from cqrs_order.domain.order import Order
from cqrs_order.infrastructure.event_store import IEventStore
from cqrs_order.observability.logger import get_logger

logger = get_logger(__name__)


class OrderRepository:
    """Mediates between ``Order`` and an ``IEventStore``.

    ``load`` is lenient: an order with no history comes back as a
    zero-value ``Order()`` instead of an error.  Use ``get`` when the
    caller needs to tell "never existed" apart from "empty".
    """

    def __init__(self, store: IEventStore) -> None:
        self._store = store

    @property
    def store(self) -> IEventStore:
        return self._store

    def save(self, order: Order) -> tuple[DomainEvent, ...]:
        """Persist *order*'s uncommitted events.  Returns what was appended."""
        pending = order.uncommitted
        if not pending:
            return ()
        self._store.append(order.id, pending)
        order.mark_committed()
        logger.info("order.saved", order_id=order.id, events=len(pending))
        return pending

    def load(self, order_id: str) -> Order:
        """Replay *order_id*'s history; zero-value ``Order`` if there is none."""
        try:
            return self.get(order_id)
        except OrderNotFound:
            logger.debug("order.load_miss", order_id=order_id)
            return Order()

    def get(self, order_id: str) -> Order:
        """Replay *order_id*'s history.  Raises ``OrderNotFound``."""
        return Order.replay(self._store.load(order_id))
