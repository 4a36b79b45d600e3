"""Custom exception hierarchy for the ordering core."""


class OrderingError(Exception):
    """Base exception for all ordering core errors."""


# --- Configuration ---
class ConfigError(OrderingError):
    """Invalid or missing configuration."""


# --- Aggregate ---
class OrderError(OrderingError):
    """Order operation rejected by the aggregate.  Caller-correctable."""


class AlreadyPlaced(OrderError):
    """``place`` invoked on an order that already has an identifier."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"order {order_id!r} has already been placed")


class EmptyOrderLine(OrderError):
    """``place`` invoked without any order lines."""

    def __init__(self, order_id: str = ""):
        self.order_id = order_id
        super().__init__("empty order line")


class MissingOrderId(OrderError):
    """``place`` invoked on an order that was never given an identifier."""

    def __init__(self) -> None:
        super().__init__("order has no identifier to place under")


class ForeignEvent(OrderingError):
    """An event owned by one order was applied to another."""

    def __init__(self, event_order_id: str, order_id: str):
        self.event_order_id = event_order_id
        self.order_id = order_id
        super().__init__(
            f"event for order {event_order_id!r} applied to order {order_id!r}"
        )


# --- Store ---
class StoreError(OrderingError):
    """Event store failure."""


class OrderNotFound(StoreError):
    """No events are recorded for the requested order."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"order {order_id!r} was not found")


# --- Commands ---
class UnknownCommand(OrderingError):
    """The command handler received an object it cannot route."""

    def __init__(self, command: object):
        self.command = command
        super().__init__(f"unknown command type: {type(command).__name__}")
