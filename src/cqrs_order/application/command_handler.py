"""Command handler: the single entry point from intents to the aggregate.

Each command runs one load -> operate -> save cycle:

*  ``PlaceOrder``: a fresh ``Order`` seeded with the command's id is
   placed, then saved.
*  ``ActivateOrder``: the order is loaded (a missing order loads as a
   zero-value ``Order``), activated, then saved.

Aggregate rejections (``OrderError``) do not escape ``handle``; they are
logged and returned on the ``CommandResult``.  The order is still passed
to ``save``, which does nothing because no event was applied.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from cqrs_order.core.errors import OrderError, UnknownCommand
from cqrs_order.domain.commands import ActivateOrder, Command, PlaceOrder
from cqrs_order.domain.events import DomainEvent
from cqrs_order.domain.order import Order
from cqrs_order.infrastructure.repository import OrderRepository
from cqrs_order.observability.logger import command_context, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of handling one command."""

    command: Command
    order_id: str
    events: tuple[DomainEvent, ...] = ()
    error: OrderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CommandHandler:
    """Routes commands to ``Order`` operations and persists the result."""

    def __init__(self, repository: OrderRepository) -> None:
        self._repository = repository

    def handle(self, command: Command) -> CommandResult:
        """Handle *command*.

        Raises:
            UnknownCommand: *command* is not a known command type.
        """
        with command_context(type(command).__name__, getattr(command, "order_id", None)):
            match command:
                case PlaceOrder(order_id=order_id, lines=lines):
                    order = Order(order_id)
                    error = self._run(order.place, lines)
                case ActivateOrder(order_id=order_id):
                    order = self._repository.load(order_id)
                    error = self._run(order.activate)
                case _:
                    raise UnknownCommand(command)

            events = self._repository.save(order)
            logger.info("command.handled", ok=error is None, events=len(events))
        return CommandResult(
            command=command, order_id=order_id, events=events, error=error,
        )

    def handle_many(self, commands: Iterable[Command]) -> list[CommandResult]:
        """Handle *commands* one after another, in order."""
        return [self.handle(c) for c in commands]

    @staticmethod
    def _run(operation: Callable[..., object], *args: Any) -> OrderError | None:
        try:
            operation(*args)
        except OrderError as exc:
            logger.warning("command.rejected", reason=str(exc), error=type(exc).__name__)
            return exc
        return None
