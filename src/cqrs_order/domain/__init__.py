"""Domain layer: events, commands, and the Order aggregate.

This package defines the primitives that every other layer depends on.
Events and commands are immutable; the aggregate changes only by
applying events.
"""
