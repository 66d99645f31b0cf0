"""
Delegation Orders CLI

Operator commands for checking the notification channel and previewing the
links owners receive.

Usage:
    delegation-orders notify --message "hello" --color green
    delegation-orders link --delegator dave --display-name "Dave D" \
        --label prod-db --user bob --user carol --duration 24h --uses 2 \
        --order-num abcd1234
    delegation-orders new-id
    delegation-orders serve --port 8080 --metrics-port 9090
"""

from typing import List, Optional

import typer
from typing_extensions import Annotated

from delegation_orders.config import OrdersConfig
from delegation_orders.kernel.errors import NotificationError
from delegation_orders.kernel.ids import generate_order_id
from delegation_orders.kernel.logging import configure_logging
from delegation_orders.notifier import Color, WebhookSink, build_sink
from delegation_orders.order.messages import build_order_query, format_order_link, join_list

# Configure logging to stderr (avoids polluting stdout)
configure_logging(json_output=False, log_level="INFO")

app = typer.Typer(
    name="delegation-orders",
    help="Delegation Orders - track and announce delegated access requests",
    add_completion=False,
)


@app.command()
def notify(
    message: Annotated[str, typer.Option("--message", help="Text to send")],
    color: Annotated[Color, typer.Option("--color", help="Display hint")] = Color.GRAY,
    webhook_url: Annotated[
        Optional[str],
        typer.Option("--webhook-url", help="Webhook endpoint (default: ORDERS_WEBHOOK_URL)"),
    ] = None,
) -> None:
    """Send one message through the configured notification sink"""
    config = OrdersConfig.from_env()
    if webhook_url:
        sink = WebhookSink(webhook_url, timeout=config.notification_timeout_seconds)
    else:
        sink = build_sink(config)

    try:
        sink.notify(message, color)
    except NotificationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ Notification sent")


@app.command()
def link(
    delegator: Annotated[str, typer.Option("--delegator", help="Owner asked to delegate")],
    display_name: Annotated[str, typer.Option("--display-name", help="Owner chat handle")],
    label: Annotated[List[str], typer.Option("--label", help="Requested label (repeatable)")],
    user: Annotated[List[str], typer.Option("--user", help="Receiving user (repeatable)")],
    duration: Annotated[str, typer.Option("--duration", help="Requested duration, e.g. 24h")],
    uses: Annotated[int, typer.Option("--uses", help="Delegations requested")],
    order_num: Annotated[str, typer.Option("--order-num", help="Order identifier")],
    host: Annotated[
        Optional[str],
        typer.Option("--host", help="Link host (default: ORDERS_RO_HOST)"),
    ] = None,
) -> None:
    """Print the order link an owner would receive"""
    link_host = host or OrdersConfig.from_env().ro_host
    query = build_order_query(
        delegator, join_list(label), duration, uses, order_num, join_list(user)
    )
    typer.echo(format_order_link(display_name, link_host, query))


@app.command("new-id")
def new_id() -> None:
    """Print a fresh order identifier"""
    typer.echo(generate_order_id())


@app.command()
def serve(
    port: Annotated[int, typer.Option("--port", help="Health server port")] = 8080,
    metrics_port: Annotated[
        int, typer.Option("--metrics-port", help="Prometheus metrics port")
    ] = 9090,
) -> None:
    """Run the health endpoints and Prometheus metrics for an empty registry"""
    from delegation_orders.health_server import initialize_health_server, run_health_server
    from delegation_orders.kernel.metrics import start_metrics_server
    from delegation_orders.order.registry import OrderRegistry

    config = OrdersConfig.from_env()
    configure_logging(json_output=config.json_logs, log_level=config.log_level)

    initialize_health_server(OrderRegistry.from_config(config))
    start_metrics_server(port=metrics_port)
    run_health_server(port=port)


if __name__ == "__main__":
    app()
