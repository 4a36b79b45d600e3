"""Persistence: the event store and the Order repository."""
