"""CLI entry point for the ordering core."""

from __future__ import annotations

import click

from .core.enums import StoreBackend
from .core.errors import OrderNotFound
from .domain.commands import ActivateOrder, Line, PlaceOrder


def _app(ctx: click.Context):
    from .main import bootstrap

    obj = ctx.ensure_object(dict)
    if "app" not in obj:
        overrides: dict = {}
        if obj.get("store"):
            overrides["store"] = {
                "backend": StoreBackend.JSONL.value,
                "path": obj["store"],
            }
        obj["app"] = bootstrap(config_path=obj.get("config"), overrides=overrides)
    return obj["app"]


@click.group()
@click.option("--config", default="configs/orders.toml", help="Config file path (TOML)")
@click.option("--store", default=None, help="JSONL event file; implies the jsonl backend")
@click.pass_context
def main(ctx: click.Context, config: str | None, store: str | None) -> None:
    """Event-sourced order management."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = store


@main.command()
@click.argument("order_id")
@click.option("--lines", default=1, type=click.IntRange(min=0), help="Number of order lines")
@click.pass_context
def place(ctx: click.Context, order_id: str, lines: int) -> None:
    """Place ORDER_ID."""
    app = _app(ctx)
    result = app.handler.handle(
        PlaceOrder(order_id=order_id, lines=tuple(Line() for _ in range(lines)))
    )
    if not result.ok:
        click.echo(f"Rejected: {result.error}", err=True)
        ctx.exit(1)
    click.echo(f"Placed {order_id}")


@main.command()
@click.argument("order_id")
@click.pass_context
def activate(ctx: click.Context, order_id: str) -> None:
    """Activate ORDER_ID.  Does nothing unless the order is placed."""
    app = _app(ctx)
    result = app.handler.handle(ActivateOrder(order_id=order_id))
    if result.events:
        click.echo(f"Activated {order_id}")
    else:
        click.echo(f"No change for {order_id}")


@main.command()
@click.argument("order_id")
@click.pass_context
def show(ctx: click.Context, order_id: str) -> None:
    """Show the current state of ORDER_ID."""
    app = _app(ctx)
    try:
        order = app.repository.get(order_id)
    except OrderNotFound as exc:
        click.echo(str(exc), err=True)
        ctx.exit(2)
    click.echo(f"  Order:    {order.id}")
    click.echo(f"  Status:   {order.status.value if order.status else '-'}")
    click.echo(f"  Version:  {order.version}")


@main.command()
@click.argument("order_id")
@click.pass_context
def history(ctx: click.Context, order_id: str) -> None:
    """List the recorded events of ORDER_ID in order."""
    app = _app(ctx)
    try:
        events = app.store.load(order_id)
    except OrderNotFound as exc:
        click.echo(str(exc), err=True)
        ctx.exit(2)
    for i, event in enumerate(events, start=1):
        click.echo(
            f"  {i:>3}  {event.timestamp.isoformat()}  {type(event).__name__:<16} {event.event_id}"
        )


if __name__ == "__main__":
    main()
