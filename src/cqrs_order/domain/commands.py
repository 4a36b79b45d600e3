"""Command schemas: external intents routed to the Order aggregate.

Commands are Pydantic models.  Unlike events, a command may be rejected
and leave no trace in the event store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Line(BaseModel):
    """A single order line.  Contents are not validated by the core."""

    model_config = ConfigDict(frozen=True)


class BaseCommand(BaseModel):
    """Base for all commands.  Every command targets one order."""

    model_config = ConfigDict(frozen=True)

    order_id: str


class PlaceOrder(BaseCommand):
    """Place a new order with the given lines."""

    lines: tuple[Line, ...] = Field(default_factory=tuple)


class ActivateOrder(BaseCommand):
    """Activate a previously placed order."""


Command = PlaceOrder | ActivateOrder
