"""Event-sourced order aggregate with its event store, repository, and command handler."""

__version__ = "0.1.0"
