"""Shared fixtures for the cqrs-order test suite."""

from __future__ import annotations

import pytest

from cqrs_order.application.command_handler import CommandHandler
from cqrs_order.domain.commands import Line
from cqrs_order.domain.order import Order
from cqrs_order.infrastructure.event_store import InMemoryEventStore
from cqrs_order.infrastructure.repository import OrderRepository


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def repository(store: InMemoryEventStore) -> OrderRepository:
    return OrderRepository(store)


@pytest.fixture
def handler(repository: OrderRepository) -> CommandHandler:
    return CommandHandler(repository)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

@pytest.fixture
def one_line() -> tuple[Line, ...]:
    return (Line(),)


@pytest.fixture
def placed_order(one_line) -> Order:
    """A freshly placed order with one uncommitted event."""
    order = Order("ABC123")
    order.place(one_line)
    return order
