"""Tests for ``infrastructure/repository.py``."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cqrs_order.core.enums import OrderStatus
from cqrs_order.core.errors import OrderNotFound
from cqrs_order.domain.events import OrderActivated, OrderPlaced
from cqrs_order.domain.order import Order
from cqrs_order.infrastructure.repository import OrderRepository


class TestSave:
    def test_appends_uncommitted_in_order(self, repository, store, placed_order):
        placed_order.activate()
        pending = placed_order.uncommitted

        saved = repository.save(placed_order)

        assert saved == pending
        assert [e.event_id for e in store.load("ABC123")] == [e.event_id for e in pending]

    def test_clears_buffer_after_save(self, repository, placed_order):
        repository.save(placed_order)
        assert placed_order.uncommitted == ()

    def test_second_save_does_not_duplicate(self, repository, store, placed_order):
        repository.save(placed_order)
        repository.save(placed_order)
        assert len(store.load("ABC123")) == 1

    def test_no_uncommitted_means_no_store_call(self):
        store = MagicMock()
        repo = OrderRepository(store)

        assert repo.save(Order("ABC123")) == ()
        store.append.assert_not_called()

    def test_loaded_order_does_not_resave_history(self, repository, store, placed_order):
        repository.save(placed_order)
        loaded = repository.load("ABC123")
        repository.save(loaded)
        assert len(store.load("ABC123")) == 1


class TestLoad:
    def test_round_trip(self, repository, placed_order):
        placed_order.activate()
        repository.save(placed_order)

        loaded = repository.load("ABC123")
        assert loaded.id == placed_order.id
        assert loaded.status == placed_order.status
        assert loaded.version == placed_order.version
        assert loaded.uncommitted == ()

    def test_unknown_id_is_soft_miss(self, repository):
        order = repository.load("UNKNOWN")
        assert order.id == ""
        assert order.status is None
        assert order.version == 0

    def test_replays_events_appended_directly(self, repository, store):
        store.append("Y", [OrderPlaced(order_id="Y"), OrderActivated(order_id="Y")])
        assert repository.load("Y").status == OrderStatus.ACTIVATED

    def test_other_store_errors_propagate(self):
        store = MagicMock()
        store.load.side_effect = OSError("disk gone")
        with pytest.raises(OSError):
            OrderRepository(store).load("ABC123")


class TestGet:
    def test_get_unknown_raises(self, repository):
        with pytest.raises(OrderNotFound):
            repository.get("UNKNOWN")

    def test_get_existing(self, repository, placed_order):
        repository.save(placed_order)
        assert repository.get("ABC123").status == OrderStatus.PLACED

    def test_exposes_store(self, repository, store):
        assert repository.store is store
